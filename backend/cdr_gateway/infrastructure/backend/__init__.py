"""Backend store adapters"""
from .base import BackendClient, BackendError
from .campaign_directory import HttpCampaignDirectory
from .cdr_store import HttpCdrStore
from .number_inventory import HttpNumberInventory

__all__ = [
    "BackendClient",
    "BackendError",
    "HttpCampaignDirectory",
    "HttpCdrStore",
    "HttpNumberInventory",
]
