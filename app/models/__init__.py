"""Database models."""

from app.models.admins import admins
from app.models.base import metadata
from app.models.catalog import (
    blogs,
    floating_texts,
    lucky_farmers,
    lucky_subscribers,
    plans,
    products,
    reviews,
)
from app.models.forms import callbacks, contacts, enquiries, newsletter_subscribers, participants
from app.models.orders import orders
from app.models.payments import payments
from app.models.staff import staff
from app.models.staff_assignments import staff_assignments
from app.models.staff_order_actions import staff_order_actions
from app.models.surveys import survey_responses, surveys
from app.models.transfer_requests import transfer_requests

__all__ = [
    "admins",
    "blogs",
    "callbacks",
    "contacts",
    "enquiries",
    "floating_texts",
    "lucky_farmers",
    "lucky_subscribers",
    "metadata",
    "newsletter_subscribers",
    "orders",
    "participants",
    "payments",
    "plans",
    "products",
    "reviews",
    "staff",
    "staff_assignments",
    "staff_order_actions",
    "survey_responses",
    "surveys",
    "transfer_requests",
]
