"""Kit API resource handlers."""

from .accounts import AccountsHandler
from .base import ResourceHandler
from .broadcasts import BroadcastsHandler
from .custom_fields import CustomFieldsHandler
from .email_templates import EmailTemplatesHandler
from .forms import FormsHandler
from .purchases import PurchasesHandler
from .segments import SegmentsHandler
from .sequences import SequencesHandler
from .subscribers import SubscribersHandler
from .tags import TagsHandler
from .webhooks import WebhooksHandler

__all__ = [
    "AccountsHandler",
    "BroadcastsHandler",
    "CustomFieldsHandler",
    "EmailTemplatesHandler",
    "FormsHandler",
    "PurchasesHandler",
    "ResourceHandler",
    "SegmentsHandler",
    "SequencesHandler",
    "SubscribersHandler",
    "TagsHandler",
    "WebhooksHandler",
]
