"""
gh-download-asset: download raw files and release assets from GitHub.
"""
