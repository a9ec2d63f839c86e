"""Dashboard schemas"""

from pydantic import BaseModel


class DashboardStatsResponse(BaseModel):
    totalClientes: int
    sessoesHoje: int
    sessoesSemana: int
    taxaConclusao: int
