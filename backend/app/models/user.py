from typing import Any, Dict, Optional


def new_user_document(
    name: Optional[str],
    email: str,
    photo_url: Optional[str],
    hashed_password: Optional[str] = None,
    from_google: bool = False
) -> Dict[str, Any]:
    """
    Build a user document for the `users` collection.

    Email is the lookup key; uniqueness is enforced by the service with a
    find-before-insert, not by a store index.
    Password is stored as a bcrypt hash and is absent for Google accounts.
    """
    user: Dict[str, Any] = {
        "name": name,
        "email": email,
        "photoURL": photo_url,
    }
    if from_google:
        user["fromGoogle"] = True
    else:
        user["password"] = hashed_password
    return user
