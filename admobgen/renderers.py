"""Renderers producing the Java, Swift and TypeScript constant modules."""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath
from typing import Callable, Dict, Iterable, List, Mapping

from .casing import camel_case, constant_case
from .definitions import SERVICE_NAME, Definitions
from .models import RenderedFile

WARN_MESSAGE = "THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY."

FIRE_DOCUMENT_EVENT_TS = """
export function fireDocumentEvent(eventName: string, data = null) {
  const event = new CustomEvent(eventName, { detail: data })
  document.dispatchEvent(event)
}"""


def indent4(level: int) -> str:
    return " " * (4 * level)


def _sorted_lines(lines: Iterable[str]) -> str:
    """Join ``lines`` after sorting them as rendered text."""
    return "\n".join(sorted(lines))


def _java_string_fields(mapping: Mapping[str, str]) -> str:
    return _sorted_lines(
        f'{indent4(2)}public static final String {constant_case(key)} = "{value}";'
        for key, value in mapping.items()
    )


def _java_ad_size_type(ad_size_types: Iterable[str]) -> str:
    sizes = list(ad_size_types)
    lines: List[str] = [
        f"{indent4(2)}{', '.join(sizes)};",
        "",
        f"{indent4(2)}public static AdSize getAdSize(Object adSize) {{",
    ]
    for size in sizes:
        lines.extend(
            [
                f"{indent4(3)}if (AdSizeType.{size}.equals(adSize)) {{",
                f"{indent4(4)}return AdSize.{size};",
                f"{indent4(3)}}}",
            ]
        )
    lines.append(f"{indent4(3)}return null;")
    lines.append(f"{indent4(2)}}}")
    return "\n".join(lines)


def render_java(definitions: Definitions) -> str:
    """Render ``Generated.java`` for the Android plugin sources."""
    lines_actions = _java_string_fields(definitions.actions)
    lines_events = _java_string_fields(definitions.events)
    lines_ad_size_type = _java_ad_size_type(definitions.ad_size_types)

    return f"""// {WARN_MESSAGE}
package admob.plugin;

import com.google.android.gms.ads.AdSize;

public final class Generated {{
    public final class Actions {{
{lines_actions}
    }}

    public final class Events {{
{lines_events}
    }}

    public enum AdSizeType {{
{lines_ad_size_type}
    }}
}}
"""


def render_swift(definitions: Definitions) -> str:
    """Render ``AMSGenerated.swift``.

    Only events are emitted. Actions and ad sizes never appear in the Swift
    output.
    """
    lines_events = _sorted_lines(
        f'{indent4(1)}static let {camel_case(key)} = "{value}"'
        for key, value in definitions.events.items()
    )

    return f"""// {WARN_MESSAGE}
struct AMSBannerPosition {{
    static let bottom = "bottom"
    static let top = "top"
}}

struct AMSEvents {{
{lines_events}
}}
"""


def _ts_members(mapping: Mapping[str, str]) -> str:
    return _sorted_lines(f"  {key} = '{value}'," for key, value in mapping.items())


def render_typescript(definitions: Definitions) -> str:
    """Render the cordova plugin's ``generated.ts``."""
    lines_actions = _ts_members(definitions.actions)
    lines_events = _ts_members(definitions.events)
    ad_size_type = "\n".join(f"  {size}," for size in definitions.ad_size_types)

    return f"""// {WARN_MESSAGE}
export enum NativeActions {{
  Service = '{SERVICE_NAME}',
{lines_actions}
}}

export enum Events {{
{lines_events}
}}

export enum AdSizeType {{
{ad_size_type}
}}
{FIRE_DOCUMENT_EVENT_TS}
"""


def render_consent_typescript(definitions: Definitions) -> str:
    # The consent plugin shares the event helper but has no constants of its own.
    del definitions
    return f"""// {WARN_MESSAGE}
{FIRE_DOCUMENT_EVENT_TS}
"""


class OutputTarget(Enum):
    """Closed set of generated files, keyed by their path under the packages root."""

    JAVA = "cordova/src/android/Generated.java"
    SWIFT = "cordova/src/ios/AMSGenerated.swift"
    TYPESCRIPT = "cordova/ts/generated.ts"
    CONSENT_TYPESCRIPT = "cordova-consent/ts/generated.ts"

    @property
    def path(self) -> PurePosixPath:
        return PurePosixPath(self.value)

    def render(self, definitions: Definitions) -> str:
        return _RENDERERS[self](definitions)

    def build(self, definitions: Definitions) -> RenderedFile:
        """Render this target into a :class:`RenderedFile`."""
        return RenderedFile(path=self.path, content=self.render(definitions))


_RENDERERS: Dict[OutputTarget, Callable[[Definitions], str]] = {
    OutputTarget.JAVA: render_java,
    OutputTarget.SWIFT: render_swift,
    OutputTarget.TYPESCRIPT: render_typescript,
    OutputTarget.CONSENT_TYPESCRIPT: render_consent_typescript,
}


__all__ = [
    "FIRE_DOCUMENT_EVENT_TS",
    "OutputTarget",
    "WARN_MESSAGE",
    "render_consent_typescript",
    "render_java",
    "render_swift",
    "render_typescript",
]
