from typing import Sequence

from fastapi.middleware.cors import CORSMiddleware


class SiteCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that leaves some path prefixes alone.

    Routes under an excluded prefix answer their own preflights and set
    their own CORS headers.
    """

    def __init__(self, app, *, exclude_prefixes: Sequence[str] = (), **kwargs):
        super().__init__(app, **kwargs)
        self.exclude_prefixes = tuple(exclude_prefixes)

    async def __call__(self, scope, receive, send):
        if scope["type"] == "http" and self.exclude_prefixes and scope["path"].startswith(self.exclude_prefixes):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
