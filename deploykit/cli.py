"""Main CLI interface for deploykit."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Tuple, Union

from web3 import Web3

from deploykit import config, evm, utils
from deploykit.credentials import load_signing_key
from deploykit.errors import ConfigurationError, DeployKitError
from deploykit.loader import DeploymentConfig, load_config


# Display labels for NetworkProfile.describe() keys
PROFILE_LABELS = {
    "name": "Network:",
    "rpc_endpoint": "RPC endpoint:",
    "network_id": "Network ID:",
    "confirmations": "Confirmations:",
    "timeout_blocks": "Timeout blocks:",
    "skip_dry_run": "Skip dry run:",
    "gas": "Gas limit:",
    "signer": "Signer:",
}


class DeployKitCLI:
    """Main CLI class for deploykit."""

    def __init__(self, deployment: DeploymentConfig) -> None:
        self.deployment = deployment
        self.actions: Dict[str, Tuple[str, Callable[[], None]]] = {
            "1": ("Show compiler profile", self.show_compiler_profile),
            "2": ("Show network profile", self.show_network_profile),
            "3": ("Check network provider", self.check_network_provider),
            "4": ("Show signer address", self.show_signer_address),
            "5": ("Show plugins and API keys", self.show_plugins),
            "6": ("Export driver mapping (JSON)", self.export_driver_mapping),
            "0": ("Exit", self.exit_program),
        }
        self.should_exit = False

    def run(self) -> None:
        """Run the CLI main loop."""
        utils.print_banner()
        print()
        print(f"{utils.bold('Signing key:')} {self.deployment.devkey_path}")
        print()

        while not self.should_exit:
            try:
                choice = self.prompt_main_menu()
                action = self.actions.get(choice)
                if action:
                    label, callback = action
                    utils.section_header(label)
                    try:
                        callback()
                    except (DeployKitError, ConnectionError) as e:
                        utils.error(str(e))
                    except KeyboardInterrupt:
                        utils.section_footer("Cancelled. Returning to main menu.")
                    except EOFError:
                        utils.section_footer("Received EOF. Exiting deploykit.")
                        self.should_exit = True
                else:
                    utils.warn(f"Unknown choice: {choice!r}")
            except KeyboardInterrupt:
                utils.section_footer("Interrupted. Returning to main menu.")
            except EOFError:
                print("\nGoodbye!")
                break

    def prompt_main_menu(self) -> str:
        """Prompt for main menu choice."""
        menu_items = {key: label for key, (label, _) in self.actions.items()}
        utils.print_menu("deploykit Main Menu", menu_items)
        return input("Choose an option: ").strip()

    def prompt_choice(self, title: str, options: List[str]) -> str:
        """Prompt user to choose from a list of options."""
        options_map = {str(index): option for index, option in enumerate(options, start=1)}
        reverse_map = {option.lower(): option for option in options}

        while True:
            utils.print_menu(title, list(options_map.items()))
            choice = input("Choose an option: ").strip()
            if not choice:
                continue
            if choice in options_map:
                return options_map[choice]
            normalized = choice.lower()
            if normalized in reverse_map:
                return reverse_map[normalized]
            utils.warn(f"Invalid choice: {choice!r}. Please try again.")

    def prompt_network(self) -> str:
        """Prompt for one of the configured networks."""
        return self.prompt_choice("Select a target network", config.list_networks())

    def show_compiler_profile(self) -> None:
        """Show the Solidity compiler profile."""
        compiler = self.deployment.compiler
        utils.print_fields({
            "Compiler:": "solc",
            "Version:": compiler.version,
            "Optimizer:": "enabled" if compiler.optimizer_enabled else "disabled",
            "Optimizer runs:": compiler.optimizer_runs,
        })

    def show_network_profile(self) -> None:
        """Resolve a network and show its profile."""
        network = self.prompt_network()
        profile = self.deployment.resolve(network)

        print()
        utils.print_fields({
            PROFILE_LABELS.get(key, key): value
            for key, value in profile.describe().items()
        })

    def check_network_provider(self) -> None:
        """Resolve a network and check that its RPC endpoint responds."""
        network = self.prompt_network()
        profile = self.deployment.resolve(network)

        utils.info(f"Connecting to {profile.rpc_endpoint} ...")
        status = evm.check_network(profile)

        print()
        utils.success("RPC endpoint is reachable.")
        print()
        fields: Dict[str, Any] = {
            "Chain ID:": status["chain_id"],
            "Latest block:": status["block_number"],
        }
        if "address" in status:
            fields["Signer:"] = status["address"]
            fields["Balance:"] = utils.bold_yellow(f"{status['balance']} {status['symbol']}")
        utils.print_fields(fields)

    def show_signer_address(self) -> None:
        """Load the signing key and show the account it controls."""
        signer = load_signing_key(self.deployment.devkey_path)

        print()
        utils.print_fields({
            "Key file:": signer.source,
            "Address:": utils.bold_cyan(signer.address),
            "Public key:": signer.public_key,
        })

    def show_plugins(self) -> None:
        """Show registered plugins and block explorer API keys."""
        for plugin in self.deployment.plugins:
            utils.result(f"Plugin: {plugin}")
        for name, value in self.deployment.api_keys.items():
            if value:
                utils.result(f"API key {name}: {utils.mask(value)}")
            else:
                utils.warn(f"API key {name} is not set ({config.BSCSCAN_API_KEY_ENV}).")

    def export_driver_mapping(self) -> None:
        """Print the full driver mapping as JSON."""
        mapping = self.deployment.to_driver_mapping()
        mapping["api_keys"] = {
            name: utils.mask(value) if value else None
            for name, value in mapping["api_keys"].items()
        }
        print(json.dumps(mapping, indent=2, default=_json_default))

    def exit_program(self) -> None:
        """Exit the program."""
        print("\nExiting deploykit. Goodbye!")
        self.should_exit = True


def _json_default(value: Any) -> str:
    """Render provider objects in the driver mapping."""
    if isinstance(value, Web3):
        return f"Web3({getattr(value.provider, 'endpoint_uri', '')})"
    if callable(value):
        return "lazy provider"
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def main(
    devkey_path: Union[str, Path] = config.DEFAULT_DEVKEY_PATH,
    secrets_path: Union[str, Path] = config.DEFAULT_SECRETS_PATH,
) -> int:
    """Main entry point."""
    try:
        deployment = load_config(devkey_path, secrets_path)
    except ConfigurationError as e:
        utils.error(str(e))
        print(utils.bold_red("Configuration could not be loaded."))
        return 1

    cli = DeployKitCLI(deployment)
    cli.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
