"""Services for git-grove."""
