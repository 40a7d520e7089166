"""E-mail address normalization for directory entries and converter output."""

from email_validator import SPECIAL_USE_DOMAIN_NAMES, EmailNotValidError, validate_email

# Public stand-in used to syntax-check the parts of intranet addresses
_PUBLIC_DOMAIN = "example.com"


def is_special_use_domain(domain: str) -> bool:
    """Return True for reserved names such as ``local``, ``localhost`` or ``test``."""
    domain = domain.strip().rstrip(".").lower()
    return any(domain == name or domain.endswith("." + name) for name in SPECIAL_USE_DOMAIN_NAMES)


def normalize_address(address: str) -> str:
    """Validate an e-mail address and return its normalized form.

    Build mail frequently goes to intranet hosts, so dotless domains
    (``ops@mailhost``) and special-use domains (``ops@corp.local``) are
    accepted. The local part and domain labels are still checked.

    Raises:
        ValueError: If the address is not a usable e-mail address

    Example:
        >>> normalize_address("Ops@Corp.Local")
        'Ops@corp.local'
    """
    address = address.strip()
    local, sep, domain = address.rpartition("@")
    if not sep or not local or not domain:
        raise ValueError(f"'{address}' is not an e-mail address")

    try:
        if not is_special_use_domain(domain):
            return validate_email(
                address, check_deliverability=False, globally_deliverable=False
            ).normalized

        domain = domain.rstrip(".").lower()
        validate_email(f"postmaster@{domain}.{_PUBLIC_DOMAIN}", check_deliverability=False)
        local_part = validate_email(f"{local}@{_PUBLIC_DOMAIN}", check_deliverability=False).local_part
    except EmailNotValidError as e:
        raise ValueError(str(e)) from e

    return f"{local_part}@{domain}"
