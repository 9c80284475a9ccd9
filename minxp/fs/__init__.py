"""Filesystem access: metadata, files and directories."""