# tasks/tests/__init__.py
"""
Task App Test Suite
===================

Modules:
--------
- test_engine: Unit tests for the scoring rules (deadline urgency, keyword heuristic)
- test_priority: Priority aggregator persistence, bonuses and idempotence
- test_inference: Activity-to-task inference
- test_api: REST endpoints of the tasks app

Running Tests:
--------------
    pytest backend/tasks
    python manage.py test tasks
"""
