from dataclasses import dataclass
from typing import Any, Dict

from vehicle_checker.models.vehicle_record import VehicleRecord


@dataclass(frozen=True)
class HistoryEntry:
    """ Represents a completed remote lookup """

    data: VehicleRecord
    plate: str
    timestamp: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HistoryEntry':
        return cls(data=VehicleRecord.from_dict(data['data']),
                   plate=data['plate'],
                   timestamp=int(data['timestamp']))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'data': self.data.to_dict(),
            'plate': self.plate,
            'timestamp': self.timestamp,
        }
