"""
Optional campaign descriptor (data/campaign.json by default).

The file is read fresh on every call. A missing file is normal; an unreadable
or malformed one is logged and treated as missing.
"""

from __future__ import annotations
import json
import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_PRODUCT_LABEL = "Donation"


@dataclass(frozen=True)
class CampaignConfig:
    campaign_title: str = ""
    organization_name: str = ""

    @property
    def label(self) -> str | None:
        title, org = self.campaign_title, self.organization_name
        if title and org:
            return f"{title} — {org}"
        return title or org or None


def _field(raw: dict, key: str) -> str:
    value = raw.get(key)
    return value.strip() if isinstance(value, str) else ""


def load_campaign(path: str | os.PathLike | None) -> CampaignConfig | None:
    if not path or not os.path.exists(path):
        return None
    try:
        with open(path, encoding="utf-8") as fh:
            raw = json.load(fh)
    except (OSError, ValueError) as e:
        logger.warning("Could not load campaign file %s: %s", path, e)
        return None

    if not isinstance(raw, dict):
        logger.warning("Campaign file %s is not a JSON object", path)
        return None

    return CampaignConfig(
        campaign_title=_field(raw, "campaignTitle"),
        organization_name=_field(raw, "organizationName"),
    )


def load_campaign_label(path: str | os.PathLike | None) -> str | None:
    campaign = load_campaign(path)
    return campaign.label if campaign else None
