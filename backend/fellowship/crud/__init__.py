from .base import BaseCRUD
from .user_crud import user_crud
from .invite_crud import invite_code_crud
from .prayer_crud import prayer_crud
from .post_crud import post_crud
from .event_crud import event_crud
from .notification_crud import notification_crud
from .mentorship_crud import mentorship_crud
from .spiritual_log_crud import spiritual_log_crud

__all__ = [
    "BaseCRUD",
    "user_crud",
    "invite_code_crud",
    "prayer_crud",
    "post_crud",
    "event_crud",
    "notification_crud",
    "mentorship_crud",
    "spiritual_log_crud",
]
