"""HR and student-recruitment records: HR details, requests, departments and admission criteria, stored in SQLite."""

__version__ = "0.1.0"