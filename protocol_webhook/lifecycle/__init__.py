"""Protocol lifecycle: completion, remaining-work counts and webhook payloads."""
