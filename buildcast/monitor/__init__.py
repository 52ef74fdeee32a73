"""Rich terminal rendering for buildcast status messages and snapshots."""
