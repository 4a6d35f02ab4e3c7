"""alist-refresh: targeted cache refresh for rclone crypt mounts in Alist."""

__version__ = "0.1.0"
