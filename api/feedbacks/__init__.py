"""
Feedback on a person or a team, with the target name snapshotted at creation.
"""
