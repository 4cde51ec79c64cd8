"""Tabular projection of the history log and its CSV rendering."""
import csv
import io
from typing import Iterable, List

from pydantic import BaseModel, ConfigDict

from .errors import EmptyExport
from .state import HistoryEntry, format_delta

CSV_HEADER = ['Time', 'Team', 'Change', 'Admin', 'Note']
DEFAULT_TIME_FORMAT = '%Y-%m-%d %H:%M:%S'


class ExportRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    time: str
    team: str
    change: str
    admin: str
    note: str

    def as_list(self) -> List[str]:
        return [self.time, self.team, self.change, self.admin, self.note]


def project(history: Iterable[HistoryEntry], time_format: str = DEFAULT_TIME_FORMAT) -> List[ExportRow]:
    """One row per entry, log order kept. Raises EmptyExport for an empty log.

    Times are rendered in the server's local timezone. No escaping is done
    here; that belongs to the serializer.
    """
    rows = [
        ExportRow(
            time=entry.time.astimezone().strftime(time_format),
            team=entry.team,
            change=format_delta(entry.delta),
            admin=entry.admin,
            note=entry.note or '',
        )
        for entry in history
    ]
    if not rows:
        raise EmptyExport('No history to export.')
    return rows


def to_csv(rows: Iterable[ExportRow]) -> str:
    """Every cell quoted, embedded quotes doubled."""
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator='\n')
    writer.writerow(CSV_HEADER)
    for row in rows:
        writer.writerow(row.as_list())
    return buf.getvalue()
