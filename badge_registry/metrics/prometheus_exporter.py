"""Prometheus exporter helpers."""

from __future__ import annotations

from prometheus_client import Counter


badge_upserts_total = Counter(
    "badge_upserts_total",
    "Total number of badge registrations processed, by result.",
    ["result"],
)

badge_image_renders_total = Counter(
    "badge_image_renders_total",
    "Badge photo renders performed or skipped because the photo was unchanged.",
    ["outcome"],
)
