import uuid


def generate_record_id() -> str:
    """
    Generate a random unique record identifier

    Returns:
        str: UUID4 in canonical 36-character form
    """
    return str(uuid.uuid4())
