"""Shared constants for git-grove."""

# Name of the entry at the root of every worktree. The main worktree holds the
# repository data in a .git/ directory; linked worktrees hold a .git text file
# pointing back into it.
GIT_STORE_PATH = ".git"

# Prefix of the first line of a linked worktree's .git file
GIT_FILE_PREFIX = "gitdir:"

# Directory modes
DEFAULT_GROVE_DIR_MODE = 0o755
DEFAULT_TREE_DIR_MODE = 0o700

# Deadline applied to remote listing and cloning, in seconds
DEFAULT_REMOTE_TIMEOUT = 60

# Prefix of the staging directory used while converting a repository
CONVERT_STAGING_PREFIX = ".convert-grove-"

# Remote URL shapes
HTTP_PREFIXES = ("https://", "http://")
SSH_PREFIX = "ssh://"
SSH_SCP_PATTERN = r".+@.+:.+"

# Prompts used for interactive HTTP(S) authentication
HTTP_AUTH_USERNAME_PROMPT = "username: "
HTTP_AUTH_PASSWORD_PROMPT = "password: "

# Ref name prefixes stripped when shortening a ref
REF_PREFIXES = ("refs/heads/", "refs/tags/", "refs/remotes/", "refs/")
