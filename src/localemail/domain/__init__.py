"""
Domain layer for the local mail sink.

This layer contains:
- Data models (addresses, messages, simulate options)
- Result types (explicit success/failure handling)
- Error codes and the opt-in delivery exception
"""
