"""
Campaign Domain Models
"""
from pydantic import BaseModel, ConfigDict, model_validator
from typing import Any, Optional


class Campaign(BaseModel):
    """
    Campaign snapshot as returned by the campaign backend.

    Only ``accepts_voip`` matters for routing. The backend and the dashboard
    disagree on how that flag is spelled, so all of these are accepted:

    - ``accepts_voip`` / ``acceptsVoip``
    - ``voipBehavior``: the dashboard toggle, where ``true`` means
      "Reject VoIP Calls"

    Other fields (targets, schedule, assigned number) are kept but ignored.
    """
    id: str
    name: str = ""
    accepts_voip: bool = False

    model_config = ConfigDict(extra="allow")

    @model_validator(mode="before")
    @classmethod
    def normalize_backend_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        data = dict(data)
        if "id" not in data and "_id" in data:
            data["id"] = data["_id"]
        if data.get("id") is not None:
            data["id"] = str(data["id"])
        if data.get("name") is None:
            data["name"] = ""

        if "accepts_voip" not in data:
            if "acceptsVoip" in data:
                data["accepts_voip"] = bool(data["acceptsVoip"])
            elif "voipBehavior" in data:
                data["accepts_voip"] = not bool(data["voipBehavior"])
        return data


def first_voip_campaign(campaigns: list[Campaign]) -> Optional[Campaign]:
    """
    First campaign in directory order that accepts VoIP calls.

    The directory's order is taken as-is; no sorting or priority is applied.
    """
    for campaign in campaigns:
        if campaign.accepts_voip:
            return campaign
    return None
