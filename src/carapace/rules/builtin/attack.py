"""Attack-surface rules: recon, auth, injection and API abuse."""

from carapace.rules.models import Rule


def _attack(id: str, name: str, description: str, category: str, severity: str) -> Rule:
    return Rule(
        id=id,
        name=name,
        description=description,
        category=category,
        ruleset="attack",
        severity=severity,  # type: ignore[arg-type]
    )


RECON_RULES = [
    _attack("atk-missing-security-headers", "Missing Security Headers",
            "Responses without CSP, HSTS or X-Frame-Options.", "recon", "medium"),
    _attack("atk-cors-misconfiguration", "CORS Misconfiguration",
            "Wildcard or reflected origins combined with credentials.", "recon", "high"),
    _attack("atk-no-rate-limiting", "Missing Rate Limiting",
            "Public endpoints with no throttling.", "recon", "medium"),
    _attack("atk-tech-fingerprint", "Technology Fingerprinting",
            "Version banners and stack traces exposed to clients.", "recon", "low"),
    _attack("atk-tls-weakness", "TLS/Certificate Weakness",
            "Disabled certificate checks or outdated protocol versions.", "recon", "high"),
]

AUTH_RULES = [
    _attack("atk-brute-force-vector", "Brute Force Vector",
            "Login or token endpoints without lockout or backoff.", "auth", "high"),
    _attack("atk-session-management", "Session Management Weakness",
            "Sessions that never expire or survive logout.", "auth", "high"),
    _attack("atk-mfa-weakness", "MFA/TOTP Weakness",
            "Second factors that can be skipped or replayed.", "auth", "critical"),
    _attack("atk-insecure-cookie", "Insecure Cookie Configuration",
            "Session cookies missing Secure, HttpOnly or SameSite.", "auth", "high"),
]

INJECTION_RULES = [
    _attack("atk-sqli", "SQL Injection",
            "Queries built from unsanitized input.", "injection", "critical"),
    _attack("atk-xss", "Cross-Site Scripting (XSS)",
            "User input rendered without escaping.", "injection", "high"),
    _attack("atk-command-injection", "Command Injection",
            "Shell commands built from user input.", "injection", "critical"),
    _attack("atk-ssrf", "Server-Side Request Forgery",
            "Outbound requests to user-controlled URLs.", "injection", "high"),
    _attack("atk-path-traversal", "Path Traversal",
            "File access with user-controlled paths.", "injection", "high"),
]

API_RULES = [
    _attack("atk-idor", "IDOR (Insecure Direct Object Reference)",
            "Objects fetched by id without an ownership check.", "api", "critical"),
    _attack("atk-mass-assignment", "Mass Assignment",
            "Request bodies bound directly onto models.", "api", "high"),
    _attack("atk-broken-auth", "Broken Authentication",
            "Endpoints reachable without authentication.", "api", "critical"),
    _attack("atk-excessive-data", "Excessive Data Exposure",
            "Responses returning more fields than the client needs.", "api", "medium"),
    _attack("atk-rate-limit-bypass", "Rate Limit Bypass",
            "Limits keyed on spoofable headers or easily rotated values.", "api", "medium"),
]

ALL_ATTACK_RULES = [*RECON_RULES, *AUTH_RULES, *INJECTION_RULES, *API_RULES]
