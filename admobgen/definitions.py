"""Canonical action, event and ad size data shared by every generated target."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple


def _freeze(mapping: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Definitions:
    """Immutable bundle of the three collections renderers draw from."""

    actions: Mapping[str, str] = field(default_factory=dict)
    events: Mapping[str, str] = field(default_factory=dict)
    ad_size_types: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "actions", _freeze(self.actions))
        object.__setattr__(self, "events", _freeze(self.events))
        object.__setattr__(self, "ad_size_types", tuple(self.ad_size_types))

    def replace(
        self,
        *,
        actions: Mapping[str, str] | None = None,
        events: Mapping[str, str] | None = None,
        ad_size_types: Iterable[str] | None = None,
    ) -> "Definitions":
        """Return a copy with the given collections swapped in."""
        return Definitions(
            actions=self.actions if actions is None else actions,
            events=self.events if events is None else events,
            ad_size_types=self.ad_size_types if ad_size_types is None else tuple(ad_size_types),
        )


SERVICE_NAME = "AdMob"

ACTIONS: Mapping[str, str] = {
    "ready": "ready",
    "configure": "configure",
    "configRequest": "configRequest",
    "adCreate": "adCreate",
    "adIsLoaded": "adIsLoaded",
    "adLoad": "adLoad",
    "adShow": "adShow",
    "adHide": "adHide",
    "bannerConfig": "bannerConfig",
    "requestTrackingAuthorization": "requestTrackingAuthorization",
    "setAppMuted": "setAppMuted",
    "setAppVolume": "setAppVolume",
    "webviewGoto": "webviewGoto",
}

EVENTS: Mapping[str, str] = {
    "ready": "admob.ready",
    "adClick": "admob.ad.click",
    "adDismiss": "admob.ad.dismiss",
    "adImpression": "admob.ad.impression",
    "adLoad": "admob.ad.load",
    "adLoadFail": "admob.ad.loadfail",
    "adReward": "admob.ad.reward",
    "adShow": "admob.ad.show",
    "adShowFail": "admob.ad.showfail",
    "bannerSize": "admob.banner.size",
}

AD_SIZE_TYPES: Tuple[str, ...] = (
    "BANNER",
    "LARGE_BANNER",
    "MEDIUM_RECTANGLE",
    "FULL_BANNER",
    "LEADERBOARD",
    "SMART_BANNER",
)

DEFAULT_DEFINITIONS = Definitions(
    actions=ACTIONS,
    events=EVENTS,
    ad_size_types=AD_SIZE_TYPES,
)


__all__ = [
    "AD_SIZE_TYPES",
    "ACTIONS",
    "DEFAULT_DEFINITIONS",
    "Definitions",
    "EVENTS",
    "SERVICE_NAME",
]
