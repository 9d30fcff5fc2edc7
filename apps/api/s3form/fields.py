AWS4_HMAC_SHA256 = "AWS4-HMAC-SHA256"
CREDENTIAL_SCOPE = "s3/aws4_request"
S3_SERVICE = "s3"
AWS4_REQUEST = "aws4_request"

# Condition keys the upload form and policy document understand.
KEY = "key"
POLICY = "policy"
X_AMZ_CREDENTIAL = "x-amz-credential"
X_AMZ_ALGORITHM = "x-amz-algorithm"
X_AMZ_SIGNATURE = "x-amz-signature"
X_AMZ_DATE = "x-amz-date"

ACL = "acl"
BUCKET = "bucket"
CONTENT_TYPE = "Content-Type"
SUCCESS_ACTION_REDIRECT = "success_action_redirect"
SUCCESS_ACTION_STATUS = "success_action_status"
X_AMZ_SECURITY_TOKEN = "x-amz-security-token"
