# assistant/responder.py

import datetime
import enum
import logging
from typing import Callable, Dict, Optional, Sequence, Tuple

from django.utils import timezone

from habits.models import WorkHabit
from tasks.ai_engine.urgency import days_until
from tasks.models import Task

logger = logging.getLogger(__name__)

TOP_TASKS_SHOWN = 3
DEADLINE_WINDOW = datetime.timedelta(days=3)


class Intent(enum.Enum):
    TASKS = "tasks"
    PRODUCTIVITY = "productivity"
    DEADLINES = "deadlines"
    HELP = "help"
    SUGGESTIONS = "suggestions"
    FALLBACK = "fallback"


# Checked in order; the first phrase list with a hit wins
INTENT_PHRASES: Sequence[Tuple[Intent, Tuple[str, ...]]] = (
    (Intent.TASKS, ("task", "todo", "priority")),
    (Intent.PRODUCTIVITY, ("productiv", "performance", "how am i doing")),
    (Intent.DEADLINES, ("deadline", "due", "urgent")),
    (Intent.HELP, ("help", "what can you do", "how")),
    (Intent.SUGGESTIONS, ("suggest", "recommend")),
)


def classify_intent(message: str) -> Intent:
    text = message.lower()
    for intent, phrases in INTENT_PHRASES:
        if any(phrase in text for phrase in phrases):
            return intent
    return Intent.FALLBACK


def _latest_habit(user) -> Optional[WorkHabit]:
    return WorkHabit.objects.filter(user=user).order_by('-analysis_date').first()


def _open_tasks(user):
    return Task.objects.filter(user=user, status__in=Task.ACTIVE_STATUSES)


def _tasks_response(user, message: str, now: datetime.datetime) -> str:
    tasks = _open_tasks(user).order_by('-priority_score', 'deadline')
    count = tasks.count()
    if not count:
        return "Great job! You don't have any pending tasks at the moment. You're all caught up!"

    top = list(tasks[:TOP_TASKS_SHOWN])
    lines = [f"You currently have {count} pending tasks. Here are your top priorities:", ""]
    for i, task in enumerate(top, start=1):
        lines.append(f"{i}. {task.title} (Priority: {task.priority_score}, Urgency: {task.urgency_level})")
    lines.append("")
    lines.append(f'I recommend focusing on "{top[0].title}" first as it has the highest priority.')
    return "\n".join(lines)


def _productivity_response(user, message: str, now: datetime.datetime) -> str:
    habit = _latest_habit(user)
    if habit is None:
        return (
            "I don't have enough data yet to provide productivity insights. "
            "Keep using the platform and I'll analyze your work patterns!"
        )

    response = (
        f"Your productivity score today is {habit.productivity_score}%. "
        f"You've completed {habit.completed_tasks} out of {habit.total_tasks} tasks. "
    )
    if habit.overload_indicator:
        response += "\n\nI've noticed signs of potential overload. "
    if habit.context_switches > 20:
        response += (
            f"You've switched contexts {habit.context_switches} times today. "
            "Consider using time-blocking to reduce interruptions. "
        )
    if habit.avg_working_hours > 9:
        response += (
            f"You've worked {habit.avg_working_hours:.1f} hours today. "
            "Remember to take breaks to maintain productivity. "
        )
    return response.rstrip()


def _deadlines_response(user, message: str, now: datetime.datetime) -> str:
    due_soon = list(
        _open_tasks(user)
        .filter(deadline__isnull=False, deadline__lte=now + DEADLINE_WINDOW)
        .order_by('deadline')
    )
    if not due_soon:
        return "You don't have any tasks with urgent deadlines in the next 3 days."

    lines = [f"You have {len(due_soon)} tasks with upcoming deadlines:", ""]
    for i, task in enumerate(due_soon, start=1):
        days = days_until(task.deadline, now)
        when = "overdue" if days <= 0 else f"{days} days"
        lines.append(f"{i}. {task.title} - Due in {when}")
    return "\n".join(lines)


def _help_response(user, message: str, now: datetime.datetime) -> str:
    return "\n".join([
        "I'm your AI productivity assistant! I can help you with:",
        "",
        "• Viewing and prioritizing your tasks",
        "• Understanding your productivity patterns",
        "• Tracking upcoming deadlines",
        "• Analyzing your work habits",
        "• Providing suggestions to improve focus",
        "",
        "Just ask me about your tasks, productivity, deadlines, or work patterns!",
    ])


def _suggestions_response(user, message: str, now: datetime.datetime) -> str:
    habit = _latest_habit(user)
    if habit is None or not habit.insights:
        return "I need more data to provide personalized suggestions. Keep working and I'll learn your patterns!"

    suggestions = habit.suggestions
    if not suggestions:
        return "You're doing great! Keep up your current work habits."

    lines = ["Based on your work patterns, here are my suggestions:", ""]
    lines.extend(f"{i}. {suggestion}" for i, suggestion in enumerate(suggestions, start=1))
    return "\n".join(lines)


def _fallback_response(user, message: str, now: datetime.datetime) -> str:
    return (
        f'I understand you\'re asking about "{message}". '
        "I can help you with tasks, productivity analysis, deadlines, and work patterns. "
        "Could you be more specific about what you'd like to know?"
    )


RESPONSE_BUILDERS: Dict[Intent, Callable[..., str]] = {
    Intent.TASKS: _tasks_response,
    Intent.PRODUCTIVITY: _productivity_response,
    Intent.DEADLINES: _deadlines_response,
    Intent.HELP: _help_response,
    Intent.SUGGESTIONS: _suggestions_response,
    Intent.FALLBACK: _fallback_response,
}


def respond(user, message: str, now: Optional[datetime.datetime] = None) -> Dict[str, str]:
    """
    Answers one chat message from current task and work-habit data.
    Nothing about the conversation is kept between calls.
    """
    now = now or timezone.now()
    intent = classify_intent(message)
    logger.info(f"Assistant: user {user.pk} intent={intent.value}")
    return {
        "intent": intent.value,
        "response": RESPONSE_BUILDERS[intent](user, message, now),
    }
