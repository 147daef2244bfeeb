"""FFmpeg orchestration for concatenating video clips.

Modules:
- commands: Argument builders for the segment and concat stages
- temp_files: Temporary stream allocation and cleanup
- runner: Subprocess execution and logging helpers
- pipeline: Sequential segment extraction followed by the final concat
"""
