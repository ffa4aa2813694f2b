from peewee import DoesNotExist, PeeweeException

from quotator_crawler.core.pricing_types import DiskType, Flavor

from .db import Database
from .models import DiskTypeRecord, FlavorRecord


class Repository:
    def __init__(self, database: Database):
        self.database = database

    # Flavor Methods
    def upsert_flavor(self, flavor: Flavor) -> None:
        """Insert a flavor, replacing any existing row with the same id."""
        try:
            with self.database.connection():
                FlavorRecord.replace(**flavor.to_dict()).execute()
        except PeeweeException as e:
            raise ValueError(f"Error saving flavor '{flavor.id}': {e!s}") from e

    def get_flavor(self, flavor_id: str) -> Flavor:
        with self.database.connection():
            try:
                record = FlavorRecord.get_by_id(flavor_id)
            except DoesNotExist as e:
                raise ValueError(f"Flavor with ID '{flavor_id}' does not exist.") from e
            return _to_flavor(record)

    def list_flavors(self) -> list[Flavor]:
        with self.database.connection():
            return [_to_flavor(r) for r in FlavorRecord.select().order_by(FlavorRecord.id)]

    # Disk Type Methods
    def upsert_disk_type(self, disk_type: DiskType) -> None:
        """Insert a disk type, replacing any existing row with the same id."""
        try:
            with self.database.connection():
                DiskTypeRecord.replace(**disk_type.to_dict()).execute()
        except PeeweeException as e:
            raise ValueError(f"Error saving disk type '{disk_type.id}': {e!s}") from e

    def get_disk_type(self, disk_type_id: str) -> DiskType:
        with self.database.connection():
            try:
                record = DiskTypeRecord.get_by_id(disk_type_id)
            except DoesNotExist as e:
                raise ValueError(f"Disk type with ID '{disk_type_id}' does not exist.") from e
            return _to_disk_type(record)

    def list_disk_types(self) -> list[DiskType]:
        with self.database.connection():
            return [_to_disk_type(r) for r in DiskTypeRecord.select().order_by(DiskTypeRecord.id)]


def _to_flavor(record: FlavorRecord) -> Flavor:
    return Flavor(
        id=record.id,
        name=record.name,
        vcpus=record.vcpus,
        ram_gb=record.ram_gb,
        price_hourly=record.price_hourly,
        price_monthly=record.price_monthly,
        price_yearly_1=record.price_yearly_1,
        price_yearly_3=record.price_yearly_3,
        region=record.region,
        created_at=record.created_at,
    )


def _to_disk_type(record: DiskTypeRecord) -> DiskType:
    return DiskType(
        id=record.id,
        name=record.name,
        price_per_gb=record.price_per_gb,
        region=record.region,
        created_at=record.created_at,
    )
