"""Publish effect dispatchers.

Each dispatcher owns its own record type and reports its outcome as an
``Ok``/``Err`` result rather than raising.
"""

from presswire.dispatchers.audio import AudioOutcome, AudioTrigger
from presswire.dispatchers.crosspost import CrossPostOutcome, CrossPostReplicator
from presswire.dispatchers.newsletter import NewsletterDispatcher, SendOutcome
from presswire.dispatchers.social import ShareResult, SocialFanout

__all__ = [
    "AudioOutcome",
    "AudioTrigger",
    "CrossPostOutcome",
    "CrossPostReplicator",
    "NewsletterDispatcher",
    "SendOutcome",
    "ShareResult",
    "SocialFanout",
]
