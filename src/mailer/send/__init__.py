"""
Send endpoint: request schemas, dispatcher and router.
"""
