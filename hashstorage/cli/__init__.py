"""
Hashstorage CLI

Commands:
- hashstorage version - CLI and backend versions
- hashstorage profile login/show/logout - Local identity management
- hashstorage block groups/keys/get/put - Signed block operations
"""
