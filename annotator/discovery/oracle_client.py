"""
Oracle connection management for the annotator.

``oracledb`` is imported at module level; if it is not installed this
module will fail loudly on import with a clear ``ModuleNotFoundError``.
Install it with:  pip install python-oracledb

Usage:
    from annotator.discovery.oracle_client import connect, parse_connect_string

    user, password, dsn = parse_connect_string("scott/tiger@host:1521/service")
    conn = connect(dsn=dsn, user=user, password=password)
    try:
        provider = OracleCatalogProvider(conn)
    finally:
        conn.close()
"""

from __future__ import annotations

import logging

import oracledb  # hard import, fails loudly if python-oracledb is not installed

from annotator.configs.exceptions import ConnectionFailure

logger = logging.getLogger(__name__)


def parse_connect_string(conn_str: str) -> tuple[str, str, str]:
    """
    Split an EZConnect-style ``user/password@dsn`` string.

    The password may itself contain ``/``; the DSN may contain ``@`` only
    if the password does not (the last ``@`` separates them).

    Returns:
        ``(user, password, dsn)``

    Raises:
        ValueError: If the string is not of the form ``user/password@dsn``.
    """
    credentials, sep, dsn = conn_str.rpartition("@")
    user, slash, password = credentials.partition("/")
    if not sep or not slash or not user or not dsn:
        raise ValueError(
            "Connection string must look like user/password@host:port/service"
        )
    return user, password, dsn


def connect(
    dsn: str,
    user: str,
    password: str,
    call_timeout_ms: int = 0,
    **kwargs,
):
    """
    Open a new ``oracledb`` connection.

    Args:
        dsn:             Oracle DSN string (``host:port/service_name``).
        user:            Oracle username.
        password:        Oracle password.
        call_timeout_ms: Per-round-trip timeout; ``0`` keeps the driver default.
        **kwargs:        Additional keyword args forwarded to ``oracledb.connect()``.

    Returns:
        An open ``oracledb.Connection`` object.

    Raises:
        ConnectionFailure: If the connection cannot be established.
    """
    try:
        conn = oracledb.connect(dsn=dsn, user=user, password=password, **kwargs)
    except oracledb.Error as e:
        raise ConnectionFailure(f"Failed to connect to Oracle: {e}", dsn=dsn) from e

    if call_timeout_ms:
        conn.call_timeout = call_timeout_ms

    logger.debug("Connected to %s as %s", dsn, user)
    return conn
