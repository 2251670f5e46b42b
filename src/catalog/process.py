"""Process listing and user identity facts."""

from facts import FactRegistry

BSD_SYSTEMS = ["FreeBSD", "NetBSD", "OpenBSD", "Darwin"]


def register(registry: FactRegistry) -> None:
    # ps holds the command line to use for a full process listing, not its output
    registry.register("ps", lambda r: r.set_execution(lambda: "ps -ef"))

    def bsd_ps(res):
        res.confine(operatingsystem=BSD_SYSTEMS)
        res.set_execution(lambda: "ps -auxwww")

    registry.register("ps", bsd_ps)

    def whoami(res):
        res.confine(kernel="linux")
        res.set_execution("whoami")

    registry.register("id", whoami)
