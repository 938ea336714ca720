# (c) Copyright Datacraft, 2026


def raise_on_empty(**kwargs):
    """Raises ValueError exception if at least one value of the
    key in kwargs dictionary is None or an empty string
    """
    for key, value in kwargs.items():
        if value is None or value == "":
            raise ValueError(
                 f"{key} is expected to be non-empty"
            )
