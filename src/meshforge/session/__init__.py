"""Observable session state: ports, machine status, coordinates, job file."""

from meshforge.session.classifier import classify, state_label
from meshforge.session.coordinates import DEFAULT_WORK_Z, CoordinateModel
from meshforge.session.job import (
    JobFileModel,
    RecentFilesHistory,
    describe_size,
    no_bounds,
    read_file_metadata,
)
from meshforge.session.model import MachineSession
from meshforge.session.observable import Observable
from meshforge.session.poller import StatusPoller
from meshforge.session.ports import PortRegistry, reconcile_selection
from meshforge.session.sequencing import RequestSequencer

__all__ = [
    "CoordinateModel",
    "DEFAULT_WORK_Z",
    "JobFileModel",
    "MachineSession",
    "Observable",
    "PortRegistry",
    "RecentFilesHistory",
    "RequestSequencer",
    "StatusPoller",
    "classify",
    "describe_size",
    "no_bounds",
    "read_file_metadata",
    "reconcile_selection",
    "state_label",
]
