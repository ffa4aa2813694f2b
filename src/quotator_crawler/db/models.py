from peewee import SQL, FloatField, IntegerField, Model, TextField

from .db import db_instance


class BaseModel(Model):
    class Meta:
        database = db_instance.proxy


class FlavorRecord(BaseModel):
    id = TextField(primary_key=True)
    name = TextField()
    vcpus = IntegerField()
    ram_gb = FloatField()
    price_hourly = FloatField()
    price_monthly = FloatField(default=0, constraints=[SQL("DEFAULT 0")])
    price_yearly_1 = FloatField(default=0, constraints=[SQL("DEFAULT 0")])
    price_yearly_3 = FloatField(default=0, constraints=[SQL("DEFAULT 0")])
    region = TextField()
    created_at = TextField()  # ISO-8601, read as text by the quote API

    class Meta:
        table_name = "flavors"


class DiskTypeRecord(BaseModel):
    id = TextField(primary_key=True)
    name = TextField()
    price_per_gb = FloatField()
    region = TextField()
    created_at = TextField()

    class Meta:
        table_name = "disk_types"

