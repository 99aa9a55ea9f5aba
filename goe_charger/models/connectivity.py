# goe_charger/models/connectivity.py
from dataclasses import dataclass
from enum import Enum


class Connectivity(Enum):
    UNKNOWN = "UNKNOWN"
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"


class ConnectivityDetail(Enum):
    NONE = "NONE"
    COMMUNICATION_ERROR = "COMMUNICATION_ERROR"


@dataclass(frozen=True)
class ConnectivityState:
    status: Connectivity
    detail: ConnectivityDetail = ConnectivityDetail.NONE
    message: str | None = None

    @property
    def online(self) -> bool:
        return self.status is Connectivity.ONLINE


ONLINE = ConnectivityState(Connectivity.ONLINE)
