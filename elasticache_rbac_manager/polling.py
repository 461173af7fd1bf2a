# -*- coding: utf-8 -*-
import logging
import threading

from .exceptions import PollCancelled, RemoteError

# creating and modifying users or groups takes minutes to settle
MAX_ATTEMPTS = 50
POLL_INTERVAL = 3.0


def wait_for(predicate, identifier, attempts=None, interval=None, cancel=None):
    """
    Polls predicate until it is true.

    :type predicate: callable
    :param predicate: no argument callable returning a bool, may raise RemoteError
    :type identifier: str
    :param identifier: what is being waited on, for logging
    :type cancel: threading.Event
    :param cancel: optional event, once set the wait stops with PollCancelled
    :return: True once predicate holds, False if it never did or a remote call failed
    """
    if attempts is None:
        attempts = MAX_ATTEMPTS
    if interval is None:
        interval = POLL_INTERVAL
    if cancel is None:
        cancel = threading.Event()

    for attempt in range(attempts):
        if cancel.is_set():
            raise PollCancelled(identifier)
        try:
            if predicate():
                return True
        except RemoteError as e:
            logging.getLogger(__name__).debug(f"Stopped waiting for {identifier}: {e}")
            return False
        if attempt + 1 < attempts and cancel.wait(interval):
            raise PollCancelled(identifier)

    logging.getLogger(__name__).debug(f"Gave up waiting for {identifier} after {attempts} attempts")
    return False
