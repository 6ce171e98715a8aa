"""Static operation catalog and seeded permission profiles.

Naming convention: family.entity.action (two-segment keys use the family
as entity). Every event emitted through the dispatcher uses one of these
keys or a custom key registered at runtime.
"""

from dataclasses import dataclass

from motorent.domain.value_objects import PermissionType


@dataclass(frozen=True)
class OperationDefinition:
    key: str
    description: str
    requires_approval: bool = False
    is_view_only: bool = False


@dataclass(frozen=True)
class GrantDefinition:
    pattern: str
    permission_types: frozenset[PermissionType]


@dataclass(frozen=True)
class ProfileDefinition:
    name: str
    description: str
    grants: tuple[GrantDefinition, ...]


def _op(key: str, description: str, *, approval: bool = False, view: bool = False) -> OperationDefinition:
    return OperationDefinition(key, description, requires_approval=approval, is_view_only=view)


def _grant(pattern: str, *types: PermissionType) -> GrantDefinition:
    return GrantDefinition(pattern, frozenset(types))


V = PermissionType.VIEW
C = PermissionType.CREATE
E = PermissionType.EXECUTE
A = PermissionType.APPROVE


OPERATION_DEFINITIONS: tuple[OperationDefinition, ...] = (
    # Fleet
    _op("fleet.moto.view", "Ver motos", view=True),
    _op("fleet.moto.create", "Crear moto en el sistema"),
    _op("fleet.moto.update", "Actualizar datos de moto"),
    _op("fleet.moto.decommission", "Dar de baja una moto"),
    _op("fleet.moto.bulk_update", "Actualización masiva de motos"),
    _op("fleet.moto.upload_document", "Subir documento de moto"),
    _op("fleet.moto.delete_document", "Eliminar documento de moto"),
    _op("fleet.moto.update_insurance", "Actualizar seguro de moto"),
    _op("fleet.moto.update_registration", "Actualizar patentamiento de moto"),
    # Rental - contract
    _op("rental.contract.view", "Ver contratos", view=True),
    _op("rental.contract.create", "Crear contrato de alquiler"),
    _op("rental.contract.update", "Actualizar contrato"),
    _op("rental.contract.activate", "Activar contrato", approval=True),
    _op("rental.contract.terminate", "Terminar contrato"),
    _op("rental.contract.expiring", "Contrato próximo a vencer"),
    _op("rental.contract.exercise_purchase", "Ejercer opción de compra", approval=True),
    # Rental - client
    _op("rental.client.view", "Ver clientes", view=True),
    _op("rental.client.create", "Crear cliente"),
    _op("rental.client.approve", "Aprobar cliente", approval=True),
    _op("rental.client.reject", "Rechazar cliente"),
    _op("rental.client.update", "Actualizar datos de cliente"),
    _op("rental.client.delete", "Eliminar cliente"),
    # Payment
    _op("payment.view", "Ver pagos", view=True),
    _op("payment.create", "Registrar pago"),
    _op("payment.update", "Actualizar datos de pago"),
    _op("payment.approve", "Aprobar pago", approval=True),
    _op("payment.reject", "Rechazar pago"),
    _op("payment.refund", "Reembolsar pago", approval=True),
    _op("payment.checkout", "Iniciar checkout de pago"),
    # Invoice - sale
    _op("invoice.sale.view", "Ver facturas de venta", view=True),
    _op("invoice.sale.create", "Crear factura de venta"),
    _op("invoice.sale.update", "Actualizar factura de venta"),
    _op("invoice.sale.send", "Enviar factura"),
    _op("invoice.sale.cancel", "Anular factura de venta"),
    # Invoice - purchase
    _op("invoice.purchase.view", "Ver facturas de compra", view=True),
    _op("invoice.purchase.create", "Registrar factura de compra"),
    _op("invoice.purchase.approve", "Aprobar factura de compra", approval=True),
    _op("invoice.purchase.reject", "Rechazar factura de compra"),
    _op("invoice.purchase.cancel", "Eliminar factura de compra"),
    # Invoice - credit note
    _op("invoice.credit_note.create", "Crear nota de crédito"),
    # Accounting
    _op("accounting.entry.create", "Crear asiento contable"),
    _op("accounting.entry.close", "Cerrar asiento contable"),
    _op("accounting.period.close", "Cerrar período contable", approval=True),
    _op("accounting.period.reopen", "Reabrir período contable", approval=True),
    _op("accounting.retention.calculate", "Calcular retenciones"),
    _op("accounting.perception.calculate", "Calcular percepciones"),
    _op("accounting.depreciation.execute", "Ejecutar depreciación"),
    _op("accounting.tax.iva_position", "Posición IVA"),
    _op("accounting.report.generate", "Generar reportes contables", view=True),
    _op("accounting.reconciliation.execute", "Ejecutar conciliación"),
    # Expenses
    _op("expense.view", "Ver gastos", view=True),
    _op("expense.create", "Registrar gasto"),
    _op("expense.update", "Actualizar gasto"),
    # Maintenance
    _op("maintenance.appointment.create", "Crear turno de mantenimiento"),
    _op("maintenance.appointment.complete", "Completar turno de mantenimiento"),
    _op("maintenance.workorder.view", "Ver órdenes de trabajo", view=True),
    _op("maintenance.workorder.create", "Crear orden de trabajo"),
    _op("maintenance.workorder.complete", "Completar orden de trabajo"),
    # Inventory
    _op("inventory.part.view", "Ver repuestos", view=True),
    _op("inventory.part.create", "Crear repuesto"),
    _op("inventory.part.update", "Actualizar repuesto"),
    _op("inventory.part.adjust_stock", "Ajustar stock de repuesto"),
    _op("inventory.purchase_order.create", "Crear orden de compra"),
    _op("inventory.purchase_order.approve", "Aprobar orden de compra", approval=True),
    # Import
    _op("import.shipment.create", "Crear embarque"),
    _op("import.shipment.finalize_cost", "Finalizar costeo de embarque"),
    # HR
    _op("hr.employee.view", "Ver empleados", view=True),
    _op("hr.employee.create", "Crear empleado"),
    _op("hr.employee.update", "Actualizar empleado"),
    _op("hr.employee.terminate", "Desvincular empleado"),
    _op("hr.payroll.calculate", "Calcular liquidación de sueldos"),
    _op("hr.payroll.approve", "Aprobar liquidación", approval=True),
    _op("hr.absence.request", "Solicitar ausencia"),
    _op("hr.absence.approve", "Aprobar ausencia"),
    # Anomalies
    _op("anomaly.view", "Ver anomalías", view=True),
    _op("anomaly.resolve", "Resolver anomalía"),
    # Monitor
    _op("monitor.events.view", "Ver eventos de negocio", view=True),
    _op("monitor.health.view", "Ver salud del sistema", view=True),
    # System
    _op("system.config.view", "Ver configuración del sistema", view=True),
    _op("system.config.update", "Actualizar configuración del sistema"),
    _op("system.user.create", "Crear usuario"),
    _op("system.user.update", "Actualizar usuario"),
    _op("system.diagnostic.run", "Ejecutar diagnóstico del sistema"),
)


SYSTEM_PROFILES: tuple[ProfileDefinition, ...] = (
    ProfileDefinition(
        "Administrador",
        "Acceso completo a todas las operaciones del sistema",
        (_grant("*", V, C, E, A),),
    ),
    ProfileDefinition(
        "Operador Flota",
        "Gestión de flota, alquileres, mantenimiento y pagos básicos",
        (
            _grant("fleet.*", V, C, E),
            _grant("rental.*", V, C, E),
            _grant("maintenance.*", V, C, E),
            _grant("payment.*", V, C),
            _grant("invoice.sale.*", V),
            _grant("inventory.*", V),
        ),
    ),
    ProfileDefinition(
        "Contador",
        "Acceso completo a contabilidad, vista de facturas y pagos",
        (
            _grant("accounting.*", V, C, E, A),
            _grant("invoice.*", V, A),
            _grant("payment.*", V, A),
            _grant("expense.*", V, C, E),
            _grant("inventory.*", V),
            _grant("import.*", V),
            _grant("anomaly.*", V),
        ),
    ),
    ProfileDefinition(
        "RRHH",
        "Gestión de recursos humanos y vista de asientos contables",
        (
            _grant("hr.*", V, C, E, A),
            _grant("accounting.entry.*", V),
        ),
    ),
    ProfileDefinition(
        "Comercial",
        "Ventas, contratos, clientes, pagos y facturación de ventas",
        (
            _grant("rental.*", V, C, E),
            _grant("fleet.*", V),
            _grant("payment.*", V, C),
            _grant("invoice.sale.*", V, C, E),
        ),
    ),
    ProfileDefinition(
        "Mecánico",
        "Órdenes de trabajo, vista de motos y repuestos",
        (
            _grant("maintenance.workorder.*", V, C, E),
            _grant("fleet.moto.*", V),
            _grant("inventory.part.*", V),
        ),
    ),
    ProfileDefinition(
        "Cliente",
        "Vista de contratos propios, pagos y facturas",
        (
            _grant("rental.contract.*", V),
            _grant("payment.*", V, C),
            _grant("invoice.sale.*", V),
        ),
    ),
    ProfileDefinition(
        "Auditor",
        "Vista de solo lectura de todas las operaciones",
        (_grant("*", V),),
    ),
)


ROLE_TO_PROFILE: dict[str, str] = {
    "ADMIN": "Administrador",
    "OPERADOR": "Operador Flota",
    "CLIENTE": "Cliente",
    "CONTADOR": "Contador",
    "RRHH_MANAGER": "RRHH",
    "COMERCIAL": "Comercial",
    "VIEWER": "Auditor",
}

LEGACY_ROLES: frozenset[str] = frozenset(ROLE_TO_PROFILE)
