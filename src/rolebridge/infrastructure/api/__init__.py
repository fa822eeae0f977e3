"""REST API for roles, users, seeding and tool calls."""
