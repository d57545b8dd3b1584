from adapters.api.handlers import system, auth, rewards, tournaments, admin

routers = [
    system.routes,
    auth.routes,
    rewards.routes,
    tournaments.routes,
    admin.routes,
]

__all__ = ["routers"]
