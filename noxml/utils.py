from typing import Any, Mapping, TypeVar

D = TypeVar("D", bound=Mapping[str, Any])


def resolve_config(config: Mapping[str, Any] | None, default_config: D) -> D:
    """Overlay ``config`` on a copy of ``default_config``; keys the defaults lack are rejected."""
    overrides = dict(config or {})
    unknown = sorted(set(overrides) - set(default_config))
    if unknown:
        raise TypeError(f"unknown config key(s): {', '.join(unknown)}")
    return {**default_config, **overrides}  # type: ignore[return-value]
