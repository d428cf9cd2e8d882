from localization.publication.service import PublishRequest, PublishResult, publish

__all__ = [
    "PublishRequest",
    "PublishResult",
    "publish",
]
