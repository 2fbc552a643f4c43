from .challenge_flow import ChallengeFlow, normalize
from .secret_hash import compute_secret_hash

__all__ = ["ChallengeFlow", "normalize", "compute_secret_hash"]
