"""Service tags identifying the library component that emitted a message.

Tags are opaque strings embedded verbatim in every formatted line. Only
``ANALYTICS`` carries behaviour: it is the tag that the analytics debug
mode lets through the severity filter.
"""

ABTESTING = "[Corelog/ABTesting]"
ANALYTICS = "[Corelog/Analytics]"
AUTH = "[Corelog/Auth]"
CORE = "[Corelog/Core]"
CRASH = "[Corelog/Crash]"
DATABASE = "[Corelog/Database]"
DYNAMIC_LINKS = "[Corelog/DynamicLinks]"
INSTANCE_ID = "[Corelog/InstanceID]"
MESSAGING = "[Corelog/Messaging]"
PERFORMANCE = "[Corelog/Performance]"
REMOTE_CONFIG = "[Corelog/RemoteConfig]"
STORAGE = "[Corelog/Storage]"


def is_analytics(service: str) -> bool:
    """Return True if *service* is the analytics tag."""
    return service == ANALYTICS
