"""Contratos de ejecución de comandos.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir subprocess por un runner falso en tests sin acoplar el
  Core a la implementación concreta.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import CommandSpec, StepResult


@runtime_checkable
class CommandRunner(Protocol):
    """Contrato mínimo para ejecutar un paso.

    Reglas de diseño:
    - `run` es síncrono: el build es secuencial y solo espera a que cada
      herramienta termine.
    - Un código de salida distinto de cero se devuelve en `StepResult`, no se
      lanza; decidir si abortar es trabajo del pipeline.
    """

    def run(self, spec: CommandSpec) -> StepResult:
        """Ejecuta `spec` y devuelve el resultado normalizado."""

        ...
