"""Business logic behind the API routers"""
