from celery import Celery
from kombu import Queue

from app.platform.config import settings


def create_celery_app() -> Celery:
    """
    Create and configure the Celery application.

    Queue Structure:
    - evaluation: scan evaluation runs (one task per domain scan)
    """
    celery_app = Celery(
        "seo_evaluator",
        broker=settings.CELERY_BROKER_URL,
        backend=settings.CELERY_RESULT_BACKEND,
    )

    celery_app.conf.update(
        task_serializer=settings.CELERY_TASK_SERIALIZER,
        result_serializer=settings.CELERY_RESULT_SERIALIZER,
        accept_content=[settings.CELERY_ACCEPT_CONTENT],
        timezone="UTC",
        enable_utc=True,
        task_track_started=settings.CELERY_TASK_TRACK_STARTED,
        task_time_limit=settings.CELERY_TASK_TIME_LIMIT,

        result_expires=3600,

        task_routes={
            "app.features.evaluation.workers.tasks.run_evaluation": {"queue": "evaluation"},
        },
        task_queues=(
            Queue("default"),
            Queue("evaluation"),
        ),
        task_default_queue="default",

        worker_prefetch_multiplier=1,  # Fair distribution
        task_acks_late=True,  # Acknowledge after task completes
        task_reject_on_worker_lost=True,  # Requeue if worker dies
    )

    celery_app.autodiscover_tasks(["app.features.evaluation.workers"])

    return celery_app


# Global Celery app instance
celery_app = create_celery_app()
