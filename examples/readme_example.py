from examples.contracts import BalanceThreshold, Vault
from sorotask import (
    Address,
    DirectoryInvoker,
    Env,
    ManualClock,
    StaticSigner,
    TaskConfig,
    TaskContract,
)

creator = Address("GCREATOR")
invoker = DirectoryInvoker()
clock = ManualClock(now=1_700_000_000)

vault = Vault()
vault_address = invoker.deploy(vault)
resolver_address = invoker.deploy(BalanceThreshold(vault, minimum=100))

contract = TaskContract(Env(signer=StaticSigner({creator}), invoker=invoker, clock=clock))

task_id = contract.register(
    TaskConfig(
        creator=creator,
        target=vault_address,
        function="harvest",
        interval=3600,
        args=(7,),
        resolver=resolver_address,
        gas_balance=1000,
    )
)
print(f"Registered task {task_id}: {contract.get_task(task_id)}")

vault.accrue(40)
contract.execute(task_id)
print(f"Pending 40, below threshold -> balance {vault.balance}")

vault.accrue(80)
clock.advance(60)
contract.execute(task_id)
print(f"Pending 120 -> balance {vault.balance}, last_run {contract.get_task(task_id).last_run}")
