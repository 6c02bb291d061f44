"""
Backend API Service - FastAPI Application

Responsibilities:
- Accept user records and run them through the create pipeline
- Serve every stored record back in arrival order
- Collapse internal errors into fixed-message 500 responses
- Log every request

Endpoints:
- POST /createUser - Persist a user and enrich with the current activity
- GET /users - List all stored users
- GET /health - Health check

Run with:
    python -m services.api
"""
