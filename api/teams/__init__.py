"""
Teams: CRUD with members expanded from persons.team_id.
"""
