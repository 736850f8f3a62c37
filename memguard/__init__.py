"""
memguard - container memory pressure workload and health assessment service.

Clean Architecture layers: domain, application, infrastructure,
presentation, shared and main (composition root).
"""

__version__ = "1.0.0"
