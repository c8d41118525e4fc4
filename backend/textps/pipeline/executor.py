"""
流水线执行器 - 编排各阶段执行

职责：
1. 按顺序执行各阶段（读取 → 几何 → 分段 → 断行 → 分栏 → 输出）
2. 记录任务阶段与统计
3. 非致命问题（超高行）记为任务告警；致命错误中止且不写出任何内容

测试要点：
- test_execute_writes_output: 完整流水线执行并写出文件
- test_failure_writes_nothing: 失败时不产生输出文件
- test_degenerate_flags: 超高行记为告警
"""

from __future__ import annotations

import logging
import sys
import uuid
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from ..config import RenderConfig, get_config
from ..interfaces import ITextReader, ITextShaper, IOutputEmitter
from ..layout import (
    GeometryResolver,
    HeaderComposer,
    LineFlowEngine,
    ParagraphSegmenter,
    StandardFontShaper,
)
from ..models import RenderJob
from ..render import PostScriptEmitter, TextReader
from .stages import RENDER_STAGES, PipelineStage, StageEnum

logger = logging.getLogger(__name__)

# 输出只含7位ASCII（高位字符已八进制转义）
OUTPUT_ENCODING = "latin-1"


def create_job(
    input_path: Path | None = None,
    output_path: Path | None = None,
    title: str | None = None,
) -> RenderJob:
    """创建任务并分配ID"""
    return RenderJob(
        job_id=str(uuid.uuid4()),
        input_path=input_path,
        output_path=output_path,
        title=title,
    )


class PipelineExecutor:
    """流水线执行器"""

    def __init__(
        self,
        config: RenderConfig | None = None,
        *,
        shaper: ITextShaper | None = None,
        reader: ITextReader | None = None,
        emitter: IOutputEmitter | None = None,
        timestamp: datetime | None = None,
    ):
        self.config = config or get_config()
        self.shaper = shaper or StandardFontShaper(line_spacing=self.config.shaper.line_spacing)
        self.reader = reader or TextReader()
        self.emitter = emitter or PostScriptEmitter()
        self.geometry = GeometryResolver()
        self.segmenter = ParagraphSegmenter(self.shaper)
        # 页眉时间戳：整个文档一次取值
        self.timestamp = timestamp

    def execute(self, job: RenderJob, out: TextIO | None = None) -> str:
        """
        执行流水线

        Args:
            job: 渲染任务（output_path 为空时写到 out 或标准输出）
            out: 可选输出流

        Returns:
            生成的PostScript文档
        """
        job.mark_running()
        context: dict[str, Any] = {}

        try:
            for stage in RENDER_STAGES:
                self._execute_stage(job, stage, context)

            document: str = context["document"]
            self._write_output(job, document, out)
            job.mark_succeeded()

        except Exception as e:
            logger.exception(f"流水线执行失败: {job.job_id}")
            job.mark_failed(str(e))
            raise

        logger.info(
            f"[{job.job_id}] 完成: {job.stats.line_count}行 {job.stats.page_count}页 "
            f"{job.stats.output_bytes}字节"
        )
        return document

    def _execute_stage(self, job: RenderJob, stage: PipelineStage, context: dict) -> None:
        """执行单个阶段"""
        job.progress.stage = stage.name
        logger.info(f"[{job.job_id}] 开始阶段: {stage.name}")

        try:
            if stage.name == StageEnum.READ_INPUT.value:
                self._stage_read(job, context)

            elif stage.name == StageEnum.RESOLVE_GEOMETRY.value:
                self._stage_geometry(job, context)

            elif stage.name == StageEnum.SEGMENT_PARAGRAPHS.value:
                self._stage_segment(job, context)

            elif stage.name == StageEnum.SHAPE_LINES.value:
                self._stage_shape(job, context)

            elif stage.name == StageEnum.FLOW_LINES.value:
                self._stage_flow(job, context)

            elif stage.name == StageEnum.EMIT_POSTSCRIPT.value:
                self._stage_emit(job, context)

        except Exception as e:
            logger.error(f"[{job.job_id}] 阶段失败 {stage.name}: {e}")
            job.add_flag(f"阶段失败:{stage.name}")
            raise

        job.progress.message = f"完成阶段: {stage.name}"

    def _stage_read(self, job: RenderJob, context: dict) -> None:
        """读取并解码输入"""
        context["text"] = self.reader.read(job.input_path, self.config.text.encoding)

    def _stage_geometry(self, job: RenderJob, context: dict) -> None:
        """配置 → 版面参数"""
        context["layout"] = self.geometry.resolve(self.config)

    def _stage_segment(self, job: RenderJob, context: dict) -> None:
        """全文 → 段落"""
        paragraphs = self.segmenter.split_paragraphs(context["text"])
        context["paragraphs"] = paragraphs
        job.stats.paragraph_count = len(paragraphs)

    def _stage_shape(self, job: RenderJob, context: dict) -> None:
        """段落 → 已排版行"""
        lines = self.segmenter.split_lines(context["paragraphs"], context["layout"])
        context["lines"] = lines
        job.stats.line_count = len(lines)

    def _stage_flow(self, job: RenderJob, context: dict) -> None:
        """分栏分页"""
        layout = context["layout"]
        composer = None
        if layout.draw_header:
            composer = HeaderComposer(self.shaper, job.display_title, timestamp=self.timestamp)

        engine = LineFlowEngine(header_composer=composer)
        result = engine.flow(context["lines"], layout, layout.draw_header)
        context["flow"] = result
        job.stats.page_count = result.page_count

        for line_index in result.degenerate_lines:
            job.add_flag(f"超高行:{line_index + 1}")

    def _stage_emit(self, job: RenderJob, context: dict) -> None:
        """生成PostScript文档（仅在内存中）"""
        document = self.emitter.render(context["flow"], context["layout"], job.display_title)
        context["document"] = document
        job.stats.output_bytes = len(document.encode(OUTPUT_ENCODING))

    def _write_output(self, job: RenderJob, document: str, out: TextIO | None) -> None:
        """全部阶段成功后一次写出"""
        if job.output_path is not None:
            job.output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(job.output_path, "w", encoding=OUTPUT_ENCODING, newline="\n") as f:
                f.write(document)
            return

        stream = out if out is not None else sys.stdout
        stream.write(document)
        stream.flush()
