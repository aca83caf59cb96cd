"""User feedback system library.

Components:
    - models: FeedbackEntry record stored per submission
    - store: flat-file JSON feedback store
    - email_notifier: SMTP alert email logic
    - service: FeedbackService orchestration layer
"""

__all__ = []
