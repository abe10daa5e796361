# bigbasket/celery_worker.py
from celery import Celery

from bigbasket.utils.settings import CELERY_BROKER_URL, CELERY_RESULT_BACKEND

celery_app = Celery(
    "bigbasket",
    broker=CELERY_BROKER_URL,
    backend=CELERY_RESULT_BACKEND,
)

# WAŻNE: Explicite importuj taski, żeby Celery je zarejestrował
celery_app.conf.imports = (
    "bigbasket.tasks.expire",
    "bigbasket.services.notification_service",
)

celery_app.conf.beat_schedule = {
    "expire-carts-every-minute": {
        "task": "bigbasket.tasks.expire.expire_carts_task",
        "schedule": 60.0,  # co 60 sekund
    },
}

celery_app.conf.timezone = "UTC"
