"""
Command mailbox for the fingerprint sensor on the bus device.

The device has no push channel; it polls ``/api/esp32/fingerprint/poll`` and
receives whatever instruction is waiting. The mailbox holds at most one
instruction. A newer deposit replaces an undelivered one, and a drain hands
the instruction over and empties the slot in one step.
"""
import enum
import logging
import threading

from flask import current_app

logger = logging.getLogger(__name__)


class CommandCode(enum.IntEnum):
    NONE = 0
    ENROLL = 1
    DELETE = 2


NO_PENDING_COMMAND = {
    "success": False,
    "message": "No pending commands",
    "code": int(CommandCode.NONE),
}


def enroll_command(student):
    return {
        "success": True,
        "message": "New student created - enroll fingerprint",
        "code": int(CommandCode.ENROLL),
        "fingerprintId": student.fingerprint_id,
        "studentName": student.name,
        "studentId": student.id,
    }


def delete_command(fingerprint_id, student_name, student_id):
    return {
        "success": True,
        "message": "Student deleted - remove fingerprint",
        "code": int(CommandCode.DELETE),
        "fingerprintId": fingerprint_id,
        "studentName": student_name,
        "studentId": student_id,
    }


class FingerprintCommandMailbox:
    """Single-slot, last-write-wins holder for the next device command."""

    def __init__(self):
        self._lock = threading.Lock()
        self._command = None

    def deposit(self, command):
        """Replace whatever command is waiting with ``command``."""
        command = dict(command)
        with self._lock:
            replaced, self._command = self._command, command
        if replaced is not None:
            logger.warning(
                "Undelivered fingerprint command (code %s, slot %s) replaced by code %s, slot %s",
                replaced.get("code"), replaced.get("fingerprintId"),
                command.get("code"), command.get("fingerprintId"),
            )
        else:
            logger.debug("Fingerprint command queued: %r", command)

    def drain(self):
        """Hand over the waiting command and empty the slot.

        Returns a copy of ``NO_PENDING_COMMAND`` when nothing is waiting.
        """
        with self._lock:
            command, self._command = self._command, None
        if command is None:
            return dict(NO_PENDING_COMMAND)
        logger.debug("Fingerprint command delivered: %r", command)
        return command

    @property
    def pending(self):
        with self._lock:
            return self._command is not None


def current_mailbox():
    """The mailbox owned by the running application."""
    return current_app.extensions["fingerprint_mailbox"]
