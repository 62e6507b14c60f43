from sqlalchemy.dialects import postgresql, sqlite
from schoolbus.extensions import db
from .base import TimestampMixin, utcnow

DEVICE_ID = 1

DEFAULT_DEVICE_DATA = {
    "temperature": 25.5,
    "humidity": 60.0,
    "gas_sensor": 0,
    "latitude": 24.7136,
    "longitude": 46.6753,
}


def _upsert_statement(table):
    # only these dialects ship INSERT .. ON CONFLICT
    if db.engine.dialect.name == "postgresql":
        return postgresql.insert(table)
    return sqlite.insert(table)


class DeviceStatus(db.Model, TimestampMixin):
    """Latest telemetry reported by the bus device. Exactly one row, id 1."""
    __tablename__ = 'device_status'

    id = db.Column(db.Integer, primary_key=True, default=DEVICE_ID)
    temperature = db.Column(db.Float, nullable=False, default=0)
    humidity = db.Column(db.Float, nullable=False, default=0)
    gas_sensor = db.Column(db.Integer, nullable=False, default=0)
    latitude = db.Column(db.Float, nullable=False, default=0)
    longitude = db.Column(db.Float, nullable=False, default=0)

    __table_args__ = (
        db.CheckConstraint('gas_sensor IN (0, 1)', name='ck_device_gas_sensor'),
    )

    @classmethod
    def get_or_create(cls):
        stmt = _upsert_statement(cls.__table__).values(
            id=DEVICE_ID, created_at=utcnow(), updated_at=utcnow(), **DEFAULT_DEVICE_DATA
        ).on_conflict_do_nothing(index_elements=["id"])
        db.session.execute(stmt)
        db.session.commit()
        return db.session.get(cls, DEVICE_ID)

    @classmethod
    def upsert(cls, data):
        """Overwrite the telemetry values in a single INSERT .. ON CONFLICT."""
        now = utcnow()
        stmt = _upsert_statement(cls.__table__).values(
            id=DEVICE_ID, created_at=now, updated_at=now, **data
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["id"],
            set_=dict(data, updated_at=now),
        )
        db.session.execute(stmt)
        db.session.commit()
        return db.session.get(cls, DEVICE_ID, populate_existing=True)

    def to_dict(self):
        return {
            "id": self.id,
            "temperature": self.temperature,
            "humidity": self.humidity,
            "gasSensor": self.gas_sensor,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
