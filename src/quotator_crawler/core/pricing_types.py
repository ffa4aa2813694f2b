from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class Flavor:
    id: str
    name: str
    vcpus: int
    ram_gb: float
    price_hourly: float
    price_monthly: float
    price_yearly_1: float
    price_yearly_3: float
    region: str
    created_at: str  # ISO-8601 UTC

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DiskType:
    id: str
    name: str
    price_per_gb: float
    region: str
    created_at: str  # ISO-8601 UTC

    def to_dict(self) -> dict:
        return asdict(self)
