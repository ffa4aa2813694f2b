"""
Static ECS flavor and EVS disk catalog for the Istanbul region.

No pricing API is called: the catalog mirrors the published rate card and
the commitment tiers are derived from the hourly rate.
"""

from datetime import datetime

import pytz

from .pricing_types import DiskType, Flavor

REGION = "tr-istanbul-1"

HOURS_PER_MONTH = 720
YEARLY_1_RATE = 0.60  # 40% off on a 1 year commitment
YEARLY_3_RATE = 0.40  # 60% off on a 3 year commitment

# (id, vcpus, ram_gb, hourly price)
# s6 general computing, c6 compute optimized, m6 memory optimized, s7 latest general
FLAVOR_RATES: tuple[tuple[str, int, float, float], ...] = (
    ("s6.small.1", 1, 1, 0.0120),
    ("s6.medium.2", 1, 2, 0.0180),
    ("s6.large.2", 2, 4, 0.0360),
    ("s6.xlarge.2", 4, 8, 0.0720),
    ("s6.2xlarge.2", 8, 16, 0.1440),
    ("s6.4xlarge.2", 16, 32, 0.2880),
    ("s6.6xlarge.2", 24, 48, 0.4320),
    ("s6.8xlarge.2", 32, 64, 0.5760),
    ("c6.large.2", 2, 4, 0.0420),
    ("c6.xlarge.2", 4, 8, 0.0840),
    ("c6.2xlarge.2", 8, 16, 0.1680),
    ("c6.4xlarge.2", 16, 32, 0.3360),
    ("c6.6xlarge.2", 24, 48, 0.5040),
    ("c6.8xlarge.2", 32, 64, 0.6720),
    ("m6.large.8", 2, 16, 0.0600),
    ("m6.xlarge.8", 4, 32, 0.1200),
    ("m6.2xlarge.8", 8, 64, 0.2400),
    ("m6.4xlarge.8", 16, 128, 0.4800),
    ("m6.6xlarge.8", 24, 192, 0.7200),
    ("m6.8xlarge.8", 32, 256, 0.9600),
    ("s7.large.2", 2, 4, 0.0380),
    ("s7.xlarge.2", 4, 8, 0.0760),
    ("s7.2xlarge.2", 8, 16, 0.1520),
    ("s7.4xlarge.2", 16, 32, 0.3040),
)

# (id, display name, price per GB per month)
DISK_RATES: tuple[tuple[str, str, float], ...] = (
    ("sata", "Common I/O (SATA)", 0.030),
    ("sas", "High I/O (SAS)", 0.060),
    ("ssd", "Ultra-high I/O (SSD)", 0.120),
    ("gpssd", "General Purpose SSD", 0.100),
    ("essd", "Extreme SSD", 0.200),
)


def timestamp(now: datetime | None = None) -> str:
    """Format a moment as an ISO-8601 UTC string, defaulting to the current time."""
    if now is None:
        now = datetime.now(pytz.UTC)
    elif now.tzinfo is None:
        now = pytz.UTC.localize(now)
    return now.astimezone(pytz.UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def tiered_prices(price_hourly: float) -> tuple[float, float, float]:
    """
    Derive the commitment tiers from an hourly rate.

    Returns:
        (monthly, yearly_1, yearly_3) totals for the whole commitment period
    """
    monthly = price_hourly * HOURS_PER_MONTH
    yearly_1 = monthly * 12 * YEARLY_1_RATE
    yearly_3 = monthly * 12 * 3 * YEARLY_3_RATE
    return monthly, yearly_1, yearly_3


def generate_flavors(now: datetime | None = None) -> list[Flavor]:
    created_at = timestamp(now)
    flavors = []
    for flavor_id, vcpus, ram_gb, price_hourly in FLAVOR_RATES:
        monthly, yearly_1, yearly_3 = tiered_prices(price_hourly)
        flavors.append(
            Flavor(
                id=flavor_id,
                name=flavor_id,
                vcpus=vcpus,
                ram_gb=float(ram_gb),
                price_hourly=price_hourly,
                price_monthly=monthly,
                price_yearly_1=yearly_1,
                price_yearly_3=yearly_3,
                region=REGION,
                created_at=created_at,
            )
        )
    return flavors


def generate_disk_types(now: datetime | None = None) -> list[DiskType]:
    created_at = timestamp(now)
    return [
        DiskType(
            id=disk_id,
            name=name,
            price_per_gb=price_per_gb,
            region=REGION,
            created_at=created_at,
        )
        for disk_id, name, price_per_gb in DISK_RATES
    ]
