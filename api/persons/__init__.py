"""
People: CRUD plus team assignment.
"""
