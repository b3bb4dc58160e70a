# tasks/ai_engine/__init__.py
"""
AI Engine Package
=================

Rule-based scoring for the WorkPulse dashboard. Nothing in here is a
learned model: every score comes from fixed tables and keyword lists, so
results are reproducible given the same input and the same "now".

Modules:
--------
- urgency: Deadline urgency classifier (days-to-deadline -> base score/tier)
- keywords: Keyword heuristic analyzer (complexity/importance of free text)
- priority: Task priority aggregator (base score + source/status bonuses)
- inference: Activity-to-task inference engine
- celery_tasks: Background rescoring via Celery

Score Contract:
---------------
PriorityAggregator.score() returns:

    {
        "task_id": int,
        "priority_score": int,      # 0..100
        "urgency_level": str,       # low | medium | high | critical
        "explanation": str,
        "factors": {...}
    }

Usage:
------
    from django.utils import timezone
    from tasks.ai_engine import PriorityAggregator

    results = PriorityAggregator().score_user_tasks(user, timezone.now())
"""

from .inference import infer_task, infer_tasks, parse_deadline
from .keywords import KeywordAnalysis, analyze_description
from .priority import PriorityAggregator
from .urgency import DeadlineUrgency, classify_deadline

__all__ = [
    # Core classes
    "PriorityAggregator",
    "DeadlineUrgency",
    "KeywordAnalysis",
    # Functions
    "analyze_description",
    "classify_deadline",
    "infer_task",
    "infer_tasks",
    "parse_deadline",
]
