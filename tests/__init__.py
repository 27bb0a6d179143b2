"""
Test suite for the quiz recorder.

This package contains tests for all components of the recorder:
- Answer bank loading
- Answer resolution
- The question loop controller
- Session recording and teardown
- Configuration and command line handling
"""
