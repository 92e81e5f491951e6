"""Run a keeper against an in-process contract for a few simulated hours.

Run from the repository root: python -m examples.keeper_example
"""

import asyncio

from examples.contracts import Vault
from sorotask import (
    Address,
    DirectoryInvoker,
    Env,
    ManualClock,
    MockAllAuths,
    TaskConfig,
    TaskContract,
)
from sorotask.config import ContractSettings, KeeperSettings
from sorotask.keeper import Keeper
from sorotask.logging_setup import setup_logging_from_settings


async def main() -> None:
    setup_logging_from_settings(ContractSettings())

    invoker = DirectoryInvoker()
    clock = ManualClock(now=1_700_000_000)
    vault = Vault(pending=10)
    contract = TaskContract(Env(signer=MockAllAuths(), invoker=invoker, clock=clock))
    contract.register(
        TaskConfig(
            creator=Address("GCREATOR"),
            target=invoker.deploy(vault),
            function="harvest",
            interval=3600,
            args=(1,),
            gas_balance=1000,
        )
    )

    keeper = Keeper(contract, KeeperSettings(polling_interval=0.1))
    for _ in range(4):
        await keeper.run_cycle()
        vault.accrue(10)
        clock.advance(1800)

    print(f"Harvests: {len(vault.harvests)}, balance: {vault.balance}")
    print(f"Metrics: {keeper.metrics.snapshot()}")


if __name__ == "__main__":
    asyncio.run(main())
