PROJECT_NAME = "SPARXSTAR Gluon"
API_V1_STR = "/api/v1"
ABILITIES_API_STR = "/wp-abilities/v1"

USER_HEADER = "X-Gluon-User"
CAPABILITIES_HEADER = "X-Gluon-Capabilities"
