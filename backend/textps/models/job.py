"""
任务模型 - 单次文档渲染的状态与结果
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class JobStatus(str, Enum):
    """任务状态枚举"""
    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class JobProgress(BaseModel):
    """任务进度"""
    stage: str = "INIT"
    message: str = ""


class JobStats(BaseModel):
    """渲染统计"""
    paragraph_count: int = 0
    line_count: int = 0
    page_count: int = 0
    output_bytes: int = 0


class RenderJob(BaseModel):
    """渲染任务实体"""
    job_id: str = Field(..., description="UUID")

    # 输入
    input_path: Path | None = Field(None, description="None 表示标准输入")
    output_path: Path | None = Field(None, description="None 表示标准输出")
    title: str | None = None

    # 状态
    status: JobStatus = JobStatus.QUEUED
    progress: JobProgress = Field(default_factory=JobProgress)
    stats: JobStats = Field(default_factory=JobStats)

    # 结果
    flags: list[str] = Field(default_factory=list, description="告警标记")
    errors: list[str] = Field(default_factory=list, description="错误信息")

    # 时间戳
    created_at: datetime = Field(default_factory=datetime.now)
    started_at: datetime | None = None
    finished_at: datetime | None = None

    @property
    def display_title(self) -> str:
        """页眉/文档标题：显式标题 > 文件名 > stdin"""
        if self.title:
            return self.title
        if self.input_path is not None:
            return str(self.input_path)
        return "stdin"

    def mark_running(self, stage: str = "READ_INPUT") -> None:
        """标记为运行中"""
        self.status = JobStatus.RUNNING
        self.started_at = datetime.now()
        self.progress.stage = stage

    def mark_succeeded(self) -> None:
        """标记为成功"""
        self.status = JobStatus.SUCCEEDED
        self.finished_at = datetime.now()

    def mark_failed(self, error: str) -> None:
        """标记为失败"""
        self.status = JobStatus.FAILED
        self.finished_at = datetime.now()
        self.errors.append(error)

    def add_flag(self, flag: str) -> None:
        """添加告警标记（不中断）"""
        if flag not in self.flags:
            self.flags.append(flag)
