"""
Backend API Service - FastAPI Application

Responsibilities:
- Serve the dashboard front end (index document and static assets)
- Aggregate EV registration statistics and charging stations from PostgreSQL
- Return one JSON envelope per request, or a generic 500 on store failure

Run with:
    python -m services.api
"""
