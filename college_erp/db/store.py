"""In-memory store shared by all services.

One Store instance is built per application (or per test) and handed to the
services explicitly; nothing here is module-level state.
"""

import itertools
import threading
from typing import Dict, Hashable, Optional, Tuple
from uuid import UUID

from fastapi import Request

from college_erp.core.config import Settings, settings as default_settings
from college_erp.core.models import (
    Admission,
    Course,
    Examination,
    Fee,
    Hostel,
    HostelAllocation,
    Room,
    Student,
    UserAccount,
)


class Store:
    def __init__(self, config: Optional[Settings] = None) -> None:
        self.settings = config or default_settings
        self._registry_lock = threading.Lock()
        self._locks: Dict[Tuple[str, Hashable], threading.RLock] = {}
        self.reset()

    def reset(self) -> None:
        """Drop every entity, counter and entity lock.

        A thread still inside a lock taken before the reset keeps its lock object;
        the entity it guarded is gone, and later callers get a fresh lock.
        """
        with self._registry_lock:
            self._locks.clear()
        # Catalog
        self.courses: Dict[UUID, Course] = {}
        self.hostels: Dict[UUID, Hostel] = {}
        self.rooms: Dict[UUID, Room] = {}
        self.examinations: Dict[UUID, Examination] = {}
        # Registry
        self.students: Dict[UUID, Student] = {}
        self.admissions: Dict[UUID, Admission] = {}
        self.users: Dict[str, UserAccount] = {}  # keyed by lower-cased email
        # Ledger and occupancy
        self.fees: Dict[UUID, Fee] = {}
        self.allocations: Dict[UUID, HostelAllocation] = {}

        self._receipt_seq = itertools.count(1)
        self._application_seq = itertools.count(1)
        self._roll_seq: Dict[Tuple[int, str], "itertools.count[int]"] = {}

    def lock_for(self, kind: str, key: Hashable) -> threading.RLock:
        """Per-entity lock, created on first use.

        Entities are never deleted one by one, so the registry holds at most one
        lock per entity (plus a few named registry locks) until reset().
        """
        with self._registry_lock:
            lock = self._locks.get((kind, key))
            if lock is None:
                lock = threading.RLock()
                self._locks[(kind, key)] = lock
            return lock

    @property
    def lock_count(self) -> int:
        with self._registry_lock:
            return len(self._locks)

    def next_receipt_number(self) -> str:
        with self._registry_lock:
            seq = next(self._receipt_seq)
        return f"{self.settings.receipt_prefix}{seq:06d}"

    def next_application_number(self, year: int) -> str:
        with self._registry_lock:
            seq = next(self._application_seq)
        return f"APP{year}{seq:05d}"

    def next_roll_sequence(self, year: int, course_code: str) -> int:
        with self._registry_lock:
            counter = self._roll_seq.setdefault((year, course_code), itertools.count(1))
            return next(counter)


def get_store(request: Request) -> Store:
    return request.app.state.store
