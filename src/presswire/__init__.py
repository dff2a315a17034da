"""presswire: publish fan-out for a multi-brand content network.

Publishing an article commits one authoritative status change and then
launches independent, failure-isolated effects: audio synthesis,
cross-brand replication, newsletter dispatch and social syndication.
"""

__version__ = "0.1.0"
