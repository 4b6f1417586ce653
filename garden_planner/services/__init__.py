"""Plan editor services: validation, pagination, repositories and confirmation-gated edits."""
