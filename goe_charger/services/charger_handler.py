# goe_charger/services/charger_handler.py

from __future__ import annotations

from typing import Dict, Iterable, Optional, Protocol, Sequence, Tuple

from goe_charger.channels import ALL_CHANNELS
from goe_charger.models.connectivity import (
    ONLINE,
    Connectivity,
    ConnectivityDetail,
    ConnectivityState,
)
from goe_charger.models.status import DeviceStatus
from goe_charger.models.values import (
    UNDEF,
    ChannelValue,
    Command,
    RefreshType,
)
from goe_charger.services.charger_client import ChargerCommunicationError, GoEChargerClient
from goe_charger.services.command_encoder import encode, key_for
from goe_charger.services.status_decoder import decode


class ChannelSink(Protocol):
    """Receives decoded channel values and connectivity changes."""

    def update_state(self, channel_id: str, value: ChannelValue) -> None:
        ...

    def update_connectivity(self, state: ConnectivityState) -> None:
        ...


class CommandSource(Protocol):
    """Yields (channel_id, command) pairs waiting to be applied."""

    def pending_commands(self) -> Iterable[Tuple[str, Command]]:
        ...


# ============================================================================
# In-memory sink / source
# ============================================================================

class ChannelStateCache:
    """Keeps the latest value per channel plus the last connectivity state."""

    def __init__(self):
        self.values: Dict[str, ChannelValue] = {}
        self.connectivity = ConnectivityState(Connectivity.UNKNOWN)

    def update_state(self, channel_id: str, value: ChannelValue) -> None:
        self.values[channel_id] = value

    def update_connectivity(self, state: ConnectivityState) -> None:
        self.connectivity = state

    def get(self, channel_id: str) -> ChannelValue:
        return self.values.get(channel_id, UNDEF)


class QueuedCommands:
    def __init__(self, commands: Iterable[Tuple[str, Command]] = ()):
        self._queue = list(commands)

    def add(self, channel_id: str, command: Command) -> None:
        self._queue.append((channel_id, command))

    def pending_commands(self) -> Iterable[Tuple[str, Command]]:
        pending, self._queue = self._queue, []
        return pending


# ============================================================================
# Handler
# ============================================================================

class ChargerHandler:
    """
    Bridges one charger to a host: polls status into a ChannelSink and turns
    host commands into device writes.
    """

    def __init__(
        self,
        client: GoEChargerClient,
        sink: ChannelSink,
        log,
        channels: Sequence[str] = ALL_CHANNELS,
    ):
        self.client = client
        self.sink = sink
        self.log = log
        self.channels = tuple(channels)

    # ------------------------------------------------------------------
    def _go_offline(self, message: Optional[str]) -> None:
        self.sink.update_connectivity(
            ConnectivityState(
                Connectivity.OFFLINE,
                ConnectivityDetail.COMMUNICATION_ERROR,
                message,
            )
        )

    def update_channels_and_status(self, status: Optional[DeviceStatus], message: Optional[str] = None) -> None:
        if status is None:
            self._go_offline(message)
            for channel_id in self.channels:
                self.sink.update_state(channel_id, UNDEF)
            return

        self.sink.update_connectivity(ONLINE)
        for channel_id in self.channels:
            self.sink.update_state(channel_id, decode(channel_id, status))

    # ------------------------------------------------------------------
    def poll(self) -> Optional[DeviceStatus]:
        try:
            status = self.client.fetch_status()
        except ChargerCommunicationError as exc:
            self.log.debug("Poll of %s failed: %s", self.client.cfg.ip, exc)
            self.update_channels_and_status(None, str(exc))
            return None

        self.update_channels_and_status(status)
        return status

    # ------------------------------------------------------------------
    def handle_command(self, channel_id: str, command: Command) -> bool:
        """Apply one command; returns True only when a write was accepted."""
        if isinstance(command, RefreshType):
            # channels refresh with the next poll
            return False

        request = encode(channel_id, command, self.client.version)
        if request is None:
            self.log.warning(
                "Could not update channel %s with key %s and value %s",
                channel_id,
                key_for(channel_id, self.client.version),
                command,
            )
            return False

        try:
            self.client.send(request)
        except ChargerCommunicationError as exc:
            self._go_offline(str(exc))
            return False
        return True

    def process(self, source: CommandSource) -> int:
        """Deliver every pending command from `source`; returns the number of accepted writes."""
        sent = 0
        for channel_id, command in source.pending_commands():
            if self.handle_command(channel_id, command):
                sent += 1
        return sent
