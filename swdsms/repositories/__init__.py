"""
Persistence adapters.

``SQLRepository`` talks to the remote relational backend and ``JSONStorage``
keeps local JSON snapshots. Both expose the same operations; services reach
them only through ``swdsms.services.failover.FailoverRouter``.
"""
