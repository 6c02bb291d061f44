"""
Registrar App - User Creation Pipeline

Responsibilities:
- Extract user fields from a create request (no validation)
- Persist the record to the append-only JSONL store
- Enrich the response with the current activity from the remote service
- Report a single combined success or failure

Outputs:
- One appended line in USERS_STORE_PATH per create attempt that reaches the store
- CreateUserResult {user, activity} on success, CreateUserError(stage, cause) otherwise

A record whose enrichment fails stays persisted; nothing is rolled back.
"""
