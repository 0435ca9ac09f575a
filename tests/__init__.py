"""
Test suite for taskcal.

This package contains:
- Unit tests for the calendar engine components
- Command and CLI tests against an in-memory calendar gateway
- Mocked EventKit tests that work without PyObjC
"""
