"""
Upstream verification endpoints and their display metadata.

Keys are the provider identifiers stored in the validation settings.
"""

PROVIDER_ENDPOINTS = {
    "mslm": "https://mslm.io/api/sv/v1",
    "email-checker": "https://email-checker.space/check_mailer.php",
    "automizely": "https://websites.automizely.com/v1/public/email-verify",
    "mail7": "https://mail7.net/api/validate-single",
    "validate-email": "https://api.validate.email/validate",
    "bazzigate": "https://emailverifiers-backend.bazzigate.com/single-email-varification",
    "supersend": "https://api.supersend.io/v1/verify-email",
    "site24x7": "https://www.site24x7.com/tools/email-validator",
}

PROVIDER_INFO = {
    "mslm": ("MSLM.io", "Comprehensive validation with detailed mailbox verification"),
    "email-checker": ("Email-checker.space", "Simple binary validation service"),
    "automizely": ("Automizely", "Bulk validation with comprehensive checking"),
    "mail7": ("Mail7.net", "Comprehensive validation with rate limits"),
    "validate-email": ("Validate.email", "Advanced validation with risk scoring"),
    "bazzigate": ("Bazzigate", "Simple boolean validation service"),
    "supersend": ("SuperSend", "Multi-step validation with detailed breakdown"),
    "site24x7": ("Site24x7", "SMTP-based validation with detailed responses"),
}
