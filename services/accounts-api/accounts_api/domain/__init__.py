"""Account domain model, contracts and workflows."""
