SUPPORTED_REQUEST_HEADERS = [
    "accept",
    "accept-language",
    "user-agent",
]
