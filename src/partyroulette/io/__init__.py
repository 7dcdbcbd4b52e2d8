from partyroulette.io.csv_import import load_roster_file, parse_roster_csv
from partyroulette.io.storage import MemoryStateStore, StateStore

__all__ = [
    "parse_roster_csv",
    "load_roster_file",
    "StateStore",
    "MemoryStateStore",
]
