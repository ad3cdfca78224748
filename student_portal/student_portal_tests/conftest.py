"""
Pytest configuration for auth service tests.

Points the service at a throwaway SQLite file and log directory before the
application modules read their settings.
"""
import os
import tempfile

_tmp_dir = tempfile.mkdtemp(prefix="student_portal_tests_")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_tmp_dir, 'test.db')}"
os.environ["LOG_DIR"] = os.path.join(_tmp_dir, "logs")
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-the-auth-service-suite"
