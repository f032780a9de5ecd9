"""Platform adapters."""
from .http import ServiceClient
from .github import GitHubService
from .supabase import SupabaseService
from .vercel import VercelService

__all__ = [
    'ServiceClient',
    'GitHubService',
    'SupabaseService',
    'VercelService',
]
