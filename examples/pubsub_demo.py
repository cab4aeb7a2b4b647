from __future__ import annotations

from watch_notify import Channel, Registry, RegistrySettings, setup_logger


class Thermostat:
    def __init__(self, target: float):
        self.target = target

    def on_reading(self, value: float):
        action = "heat" if value < self.target else "idle"
        print(f"thermostat> {value:.1f} -> {action}")


def main():
    settings = RegistrySettings.from_env()
    setup_logger(settings.logger_name, settings.log_level)
    registry = Registry(settings=settings)

    readings = Channel(registry, "temperature")
    readings.subscribe(Thermostat.on_reading, Thermostat(target=20.0))
    readings.subscribe_once(lambda value: print(f"first reading: {value}"))
    readings.subscribe(lambda value: 1 / 0)  # logged, does not stop delivery

    print("Type a temperature, or /quit to exit.")
    while True:
        user_input = input("temp> ").strip()
        if user_input.lower() in {"/quit", "quit", "exit"}:
            break
        try:
            value = float(user_input)
        except ValueError:
            print("not a number")
            continue
        readings.send(value)

    print(f"removed {readings.close()} observers")


if __name__ == "__main__":
    main()
