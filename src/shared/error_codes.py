# src/shared/error_codes.py
# Central mapping that aligns with the error contract.
# Keep keys stable; the builder UI relies on these.
ERROR_CODES = {
    # ─── Validation & Requests ──────────────────────────────────────────────
    "validation_error": {
        "http": 422,
        "message": "Validation failed for one or more fields."
    },
    "invalid_slug": {
        "http": 422,
        "message": "The URL slug is not valid."
    },
    "not_publishable": {
        "http": 422,
        "message": "Organization name and URL slug are required before publishing."
    },

    # ─── Authentication ─────────────────────────────────────────────────────
    "unauthorized": {
        "http": 401,
        "message": "Unauthorized. Please provide valid credentials."
    },
    "invalid_credentials": {
        "http": 401,
        "message": "Invalid email or password."
    },

    # ─── Resources ──────────────────────────────────────────────────────────
    "not_found": {
        "http": 404,
        "message": "Website not found."
    },
    "slug_taken": {
        "http": 409,
        "message": "This URL slug is already taken. Please choose a different one."
    },

    # ─── Collaborators / Server ─────────────────────────────────────────────
    "transport_error": {
        "http": 503,
        "message": "The service is temporarily unavailable. Please try again."
    },
    "internal_error": {
        "http": 500,
        "message": "An unexpected error occurred. Please try again later."
    },
}
