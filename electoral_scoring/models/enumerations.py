from enum import Enum


class CargoType(str, Enum):
    PRESIDENTE = "presidente"
    VICEPRESIDENTE = "vicepresidente"
    SENADOR = "senador"
    DIPUTADO = "diputado"
    PARLAMENTO_ANDINO = "parlamento_andino"


class EducationLevel(str, Enum):
    SIN_INFORMACION = "sin_informacion"
    PRIMARIA = "primaria"
    SECUNDARIA_INCOMPLETA = "secundaria_incompleta"
    SECUNDARIA_COMPLETA = "secundaria_completa"
    TECNICO_INCOMPLETO = "tecnico_incompleto"
    TECNICO_COMPLETO = "tecnico_completo"
    UNIVERSITARIO_INCOMPLETO = "universitario_incompleto"
    UNIVERSITARIO_COMPLETO = "universitario_completo"
    TITULO_PROFESIONAL = "titulo_profesional"
    MAESTRIA = "maestria"
    DOCTORADO = "doctorado"


class RoleType(str, Enum):
    ELECTIVO_ALTO = "electivo_alto"                      # Congress, ministers, governors
    ELECTIVO_MEDIO = "electivo_medio"                    # Mayors, regional councils
    EJECUTIVO_PUBLICO_ALTO = "ejecutivo_publico_alto"
    EJECUTIVO_PUBLICO_MEDIO = "ejecutivo_publico_medio"
    EJECUTIVO_PRIVADO_ALTO = "ejecutivo_privado_alto"
    EJECUTIVO_PRIVADO_MEDIO = "ejecutivo_privado_medio"
    TECNICO_PROFESIONAL = "tecnico_profesional"
    ACADEMIA = "academia"
    INTERNACIONAL = "internacional"
    PARTIDARIO = "partidario"                            # Party officer roles


class SeniorityLevel(str, Enum):
    INDIVIDUAL_CONTRIBUTOR = "individual_contributor"
    COORDINADOR = "coordinador"
    JEFATURA = "jefatura"
    GERENCIA = "gerencia"
    DIRECCION = "direccion"


class CivilSentenceType(str, Enum):
    VIOLENCE = "violence"        # Family violence
    ALIMENTOS = "alimentos"      # Unpaid child support
    LABORAL = "laboral"
    CONTRACTUAL = "contractual"


class TaxCondition(str, Enum):
    HABIDO = "habido"
    NO_HABIDO = "no_habido"      # Taxpayer cannot be located at declared address
    NO_HALLADO = "no_hallado"
    PENDIENTE = "pendiente"


class TaxStatus(str, Enum):
    ACTIVO = "activo"
    SUSPENDIDO = "suspendido"
    BAJA_DEFINITIVA = "baja_definitiva"
    BAJA_PROVISIONAL = "baja_provisional"


class DiscrepancySeverity(str, Enum):
    NONE = "none"
    MINOR = "minor"
    MAJOR = "major"
    CRITICAL = "critical"


class PresetType(str, Enum):
    BALANCED = "balanced"
    MERIT = "merit"
    INTEGRITY_FIRST = "integrity_first"
    CUSTOM = "custom"
