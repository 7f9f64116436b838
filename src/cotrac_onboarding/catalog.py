from __future__ import annotations

from typing import Optional, Tuple

from cotrac_onboarding.schemas.records import Service

SERVICES: Tuple[Service, ...] = (
    Service(
        id="basic_plus",
        name="COTRAC BASIC+",
        description="Real-time 24/7 tracking, ignition status, geo-fencing, and power cut alerts.",
        icon="fa-location-crosshairs",
    ),
    Service(
        id="gold",
        name="COTRAC GOLD",
        description=(
            "Includes Basic+ features plus Remote Immobilization (Engine Stop), SOS alert, "
            "and Voice monitoring."
        ),
        icon="fa-shield-halved",
    ),
    Service(
        id="enterprise",
        name="COTRAC ENTERPRISE",
        description=(
            "Comprehensive fleet oversight: Includes Gold features plus precision fuel level "
            "monitoring, fuel theft alerts, and consumption reports."
        ),
        icon="fa-gas-pump",
    ),
)


def get_service(service_id: str) -> Optional[Service]:
    sid = str(service_id or "").strip()
    for service in SERVICES:
        if service.id == sid:
            return service
    return None
