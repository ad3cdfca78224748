"""
auth_service package tests

Covers the student portal authentication backend:

- signup and login endpoints (`test_auth.py`)
- validation, hashing and token helpers (`test_credentials.py`)
- database initialization (`test_db_init.py`)
- auth event logging (`test_event_logger.py`)
- health probes and runtime config (`test_health.py`)
"""
