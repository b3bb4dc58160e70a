# tasks/ai_engine/inference.py

import datetime
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from ..models import Task

logger = logging.getLogger(__name__)

SKIPPED = None


def parse_deadline(value: Any) -> Optional[datetime.datetime]:
    """
    Turns a payload deadline (ISO datetime or date string, or a datetime)
    into an aware timestamp. Raises ValueError for anything unparseable.
    """
    if value in (None, ""):
        return None
    if isinstance(value, datetime.datetime):
        parsed = value
    elif isinstance(value, datetime.date):
        parsed = datetime.datetime.combine(value, datetime.time.min)
    else:
        text = str(value).strip()
        parsed = parse_datetime(text)
        if parsed is None:
            day = parse_date(text)
            if day is None:
                raise ValueError(f"Invalid deadline: {value!r}")
            parsed = datetime.datetime.combine(day, datetime.time.min)
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed, datetime.timezone.utc)
    return parsed


def _from_email(data: Dict[str, Any]) -> Dict[str, Any]:
    urgent = bool(data.get("urgent"))
    return {
        "title": f"Follow up on: {data.get('subject') or 'Email'}",
        "description": f"Respond to email from {data.get('sender') or 'sender'}",
        "urgency_level": Task.Urgency.HIGH if urgent else Task.Urgency.MEDIUM,
        "priority_score": 80 if urgent else 60,
    }


def _from_meeting(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "title": f"Prepare for: {data.get('title') or 'Meeting'}",
        "description": f"Meeting scheduled at {data.get('time') or 'TBD'}",
        "urgency_level": Task.Urgency.HIGH,
        "priority_score": 85,
    }


def _from_document(data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "title": f"Complete: {data.get('document_name') or 'Document'}",
        "description": "Continue working on document",
        "urgency_level": Task.Urgency.MEDIUM,
        "priority_score": 70,
    }


def _from_mention(data: Dict[str, Any]) -> Dict[str, Any]:
    priority = data.get("priority")
    if priority not in Task.Urgency.values:
        priority = Task.Urgency.MEDIUM
    return {
        "title": data.get("task_name") or "New task",
        "description": data.get("description") or "Task mentioned in conversation",
        "urgency_level": priority,
        "priority_score": 65,
    }


TASK_BUILDERS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    "email_received": _from_email,
    "meeting_scheduled": _from_meeting,
    "document_edited": _from_document,
    "task_mentioned": _from_mention,
}


def infer_task(activity: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Builds the field set of a draft task from one activity, or returns None
    for activity types that never produce tasks.
    """
    activity_type = activity.get("activity_type")
    builder = TASK_BUILDERS.get(activity_type)
    if builder is None:
        return SKIPPED

    data = activity.get("activity_data") or {}
    fields = builder(data)
    reference = data.get("id")
    fields.update({
        "deadline": parse_deadline(data.get("deadline")),
        "status": Task.Status.PENDING,
        "completion_percentage": 0,
        "is_ai_generated": True,
        "source_type": activity_type,
        "source_reference": str(reference) if reference not in (None, "") else None,
        "app_id": activity.get("app_id"),
    })
    return fields


def infer_tasks(user, activities: Iterable[Dict[str, Any]]) -> List[Task]:
    """
    Converts an activity batch into persisted tasks. The batch is inserted
    in one transaction: either every inferred task is stored or none is.
    """
    drafts = []
    for activity in activities:
        fields = infer_task(activity)
        if fields is SKIPPED:
            logger.debug(f"Inference: skipping activity type {activity.get('activity_type')!r}")
            continue
        # bulk_create bypasses Task.save, so freeze the creator's tier here
        fields["source_urgency"] = fields["urgency_level"]
        drafts.append(Task(user=user, **fields))

    if not drafts:
        logger.info(f"Inference: no tasks inferred for user {user.pk}")
        return []

    with transaction.atomic():
        created = Task.objects.bulk_create(drafts)

    logger.info(f"Inference: created {len(created)} tasks for user {user.pk}")
    return created
