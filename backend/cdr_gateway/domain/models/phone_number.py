"""
Phone Number Inventory Models
"""
from pydantic import BaseModel, ConfigDict, model_validator
from typing import Any


AVAILABLE_STATUS = "available"


class PhoneNumber(BaseModel):
    """A number owned by the call center, as listed by the numbers backend"""
    id: str = ""
    number: str
    status: str = ""
    is_voip: bool = False
    enabled: bool = True

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="before")
    @classmethod
    def normalize_backend_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        if data.get("id") is not None:
            data["id"] = str(data["id"])
        if "is_voip" not in data and "isVoip" in data:
            data["is_voip"] = data["isVoip"]
        # Backend sends enabled as 1/0; a missing flag means enabled
        if data.get("enabled") is None:
            data["enabled"] = True
        else:
            data["enabled"] = bool(data["enabled"])
        data["status"] = str(data.get("status") or "").strip().lower()
        return data

    @property
    def is_masking_candidate(self) -> bool:
        """Available, enabled, and not itself a VoIP line"""
        return self.status == AVAILABLE_STATUS and self.enabled and not self.is_voip
