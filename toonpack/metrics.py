"""
Prometheus metrics for the sticker pipeline.

HTTP request metrics come from prometheus-fastapi-instrumentator; these
cover what happens behind the handlers.
"""
from prometheus_client import Counter, Histogram

# Generation metrics
stickers_generated = Counter(
    'toonpack_stickers_generated_total', 'Stickers generated successfully', ['style']
)
sticker_failures = Counter(
    'toonpack_sticker_failures_total', 'Sticker generations that failed', ['style']
)
generation_duration = Histogram(
    'toonpack_sticker_generation_duration_seconds',
    'Time to generate and post-process one sticker',
    buckets=[5, 10, 20, 30, 60, 120]
)

# Export metrics
packs_exported = Counter('toonpack_packs_exported_total', 'Packs exported as ZIP')
export_size_bytes = Histogram(
    'toonpack_export_size_bytes',
    'Size of exported ZIP archives',
    buckets=[64_000, 256_000, 1_000_000, 4_000_000, 16_000_000]
)


def record_sticker(style: str, duration: float, success: bool):
    """Record the outcome of one sticker generation."""
    if success:
        stickers_generated.labels(style=style).inc()
    else:
        sticker_failures.labels(style=style).inc()
    generation_duration.observe(duration)


def record_export(size: int):
    """Record one pack export."""
    packs_exported.inc()
    export_size_bytes.observe(size)
