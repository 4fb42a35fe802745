"""X-Reels HTTP server"""
