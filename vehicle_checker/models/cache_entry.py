from dataclasses import dataclass
from typing import Any, Dict

from vehicle_checker.models.vehicle_record import VehicleRecord


@dataclass(frozen=True)
class CacheEntry:
    """ A cached vehicle record with its storage and expiry times in epoch
    milliseconds """

    MILLISECONDS_PER_DAY = 86_400_000

    data: VehicleRecord
    expires_at: int
    stored_at: int

    @classmethod
    def create(cls, data: VehicleRecord, stored_at: int, ttl_days: int) -> 'CacheEntry':
        return cls(data=data,
                   expires_at=stored_at + (ttl_days * cls.MILLISECONDS_PER_DAY),
                   stored_at=stored_at)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CacheEntry':
        return cls(data=VehicleRecord.from_dict(data['data']),
                   expires_at=int(data['expiry']),
                   stored_at=int(data['timestamp']))

    def is_expired(self, now: int) -> bool:
        return now > self.expires_at

    def to_dict(self) -> Dict[str, Any]:
        return {
            'data': self.data.to_dict(),
            'expiry': self.expires_at,
            'timestamp': self.stored_at,
        }
