from typing import List
from mailfinder.models.schemas import GeneratedEmail

def generate_email_patterns(first_name: str, last_name: str, domain: str) -> List[str]:
    """
    The eight candidate addresses for a person, in fixed order.

    Inputs are not checked; callers skip blank names or domains.
    """
    first = first_name.lower()
    last = last_name.lower()
    first_initial, last_initial = first[:1], last[:1]
    locals_ = [
        f"{first}.{last}",
        f"{first}{last}",
        f"{first}_{last}",
        first,
        last,
        f"{first}{last_initial}",
        f"{first_initial}{last}",
        f"{last}{first_initial}",
    ]
    return [f"{local}@{domain.lower()}" for local in locals_]

def generate_emails(first_name: str, last_name: str, domain: str, source_row: int | None = None) -> List[GeneratedEmail]:
    return [
        GeneratedEmail(
            email=email,
            first_name=first_name,
            last_name=last_name,
            domain=domain.lower(),
            source_row=source_row,
        )
        for email in generate_email_patterns(first_name, last_name, domain)
    ]
