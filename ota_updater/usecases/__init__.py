"""Use-case layer for the update query workflow.

Modules coordinate domain objects and ports without performing transport
I/O directly; results cross from worker threads to the owner thread only
through ``Mailbox``.
"""
