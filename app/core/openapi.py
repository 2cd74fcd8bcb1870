"""
OpenAPI schema customizations for drf-spectacular.

Adds natural language summaries to the simplejwt endpoints (which carry
no @extend_schema of their own) and publishes tag descriptions so ReDoc
groups the bookkeeping endpoints in a sensible order.
"""

# Maps operation_id to (summary, description)
JWT_SUMMARIES = {
    "auth_login_create": (
        "Log in",
        "Authenticate with email and password to receive JWT tokens.",
    ),
    "auth_token_refresh_create": (
        "Refresh access token",
        "Get a new access token using a valid refresh token.",
    ),
}

TAG_DESCRIPTIONS = [
    {
        "name": "Auth",
        "description": "Registration, JWT login and the current user.",
    },
    {
        "name": "Members",
        "description": "Household members. Accounts and postings belong to a member.",
    },
    {
        "name": "Categories",
        "description": "Income and expense categories used to classify transactions.",
    },
    {
        "name": "Accounts",
        "description": "Bank, e-wallet and cash accounts with engine-maintained balances.",
    },
    {
        "name": "Transactions",
        "description": "Income and expense postings. Creating, editing and deleting adjusts balances.",
    },
    {
        "name": "Transfers",
        "description": "Money moved between two accounts of one member, with an optional fee.",
    },
]


def group_endpoints(result, generator, request, public):
    """
    Postprocessing hook to tag and describe API endpoints.

    - Auth: every operation whose id starts with auth_
    - Bookkeeping tags are set via tags= in @extend_schema
    """
    paths = result.get("paths", {})

    for path, methods in paths.items():
        for method, operation in methods.items():
            if not isinstance(operation, dict):
                continue

            operation_id = operation.get("operationId", "")

            if operation_id in JWT_SUMMARIES:
                summary, description = JWT_SUMMARIES[operation_id]
                operation["summary"] = summary
                operation["description"] = description

            if operation_id.startswith("auth_"):
                operation["tags"] = ["Auth"]

    result["tags"] = TAG_DESCRIPTIONS
    return result
