class AppStatusCode:
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    OPERATION_SUCCESSFUL = "101"

    OPERATION_FAILED = "200"
    OPERATION_ERROR = "201"
    INVALID_INPUT = "202"
    REQUIRED_VALIDATION_ERROR = "203"
    RECORD_NOT_FOUND = "204"
    CONFLICT_ERROR = "205"
    NO_PROPERTY_AVAILABLE = "206"

    AUTHENTICATION_TOKEN_INVALID = "300"
    AUTHENTICATION_TOKEN_EXPIRED = "301"
    UNAUTHORIZED_ACTION = "302"
