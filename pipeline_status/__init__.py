"""
Pipeline Status Resource

Tracks the build lifecycle of a CI pipeline as a single versioned status
document in S3, exposed to the pipeline orchestrator through the check, in
and out resource commands.
"""

__version__ = "0.1.0"
