"""
数据模型单元测试

运行：pytest backend/tests/unit/test_models.py -v
"""

import pytest
from pydantic import TypeAdapter

from textps.models import (
    PAPER_SIZES,
    FlowResult,
    FontSpec,
    JobStatus,
    PlaceLine,
    PlacementEvent,
    RenderJob,
    StartPage,
    printable_text,
)


class TestFontSpec:
    """字体描述测试"""

    @pytest.mark.parametrize(
        "desc, name, size",
        [
            ("Monospace Bold 12", "Courier-Bold", 12),
            ("Monospace", "Courier", 10),
            ("Sans Italic", "Helvetica-Oblique", 10),
            ("Serif Bold Italic 8.5", "Times-BoldItalic", 8.5),
            ("Times-Roman 9", "Times-Roman", 9),
            ("", "Courier", 10),
        ],
    )
    def test_parse(self, desc, name, size):
        """测试 "族 [Bold] [Italic] [字号]" 解析"""
        font = FontSpec.parse(desc, default_size=10)
        assert font.name == name
        assert font.size == size

    def test_hashable(self):
        """测试字体描述可作为字典键"""
        assert {FontSpec(): 1}[FontSpec.parse("Monospace 12")] == 1


class TestPrintableText:
    """输出字符集测试"""

    def test_latin1_kept(self):
        """测试 Latin-1 可见字符保留"""
        assert printable_text("abc é ÿ") == "abc é ÿ"

    def test_others_replaced(self):
        """测试控制字符与超出范围的字符替换"""
        assert printable_text("a\tb\x7f中") == "a?b??"


class TestPaperSizes:
    """纸张表测试"""

    def test_paper_table(self):
        """测试标准纸张尺寸"""
        assert (PAPER_SIZES["a4"].width, PAPER_SIZES["a4"].height) == (595.28, 841.89)
        assert (PAPER_SIZES["letter"].width, PAPER_SIZES["letter"].height) == (612, 792)
        assert (PAPER_SIZES["legal"].width, PAPER_SIZES["legal"].height) == (612, 1008)


class TestEvents:
    """放置事件测试"""

    def test_discriminated_union(self, line_of):
        """测试按 kind 反序列化事件"""
        adapter = TypeAdapter(PlacementEvent)
        event = adapter.validate_python(
            {"kind": "place_line", "column_index": 1, "y_offset": 40,
             "line": line_of().model_dump()}
        )
        assert isinstance(event, PlaceLine)
        assert event.line.height == 100

    def test_flow_result_filters(self, line_of):
        """测试按类型筛选事件"""
        result = FlowResult(
            events=[
                StartPage(page_index=1),
                PlaceLine(column_index=0, y_offset=100, line=line_of()),
            ],
            page_count=1,
        )
        assert len(result.of_kind("start_page")) == 1
        assert [e.y_offset for e in result.placed_lines] == [100]


class TestJob:
    """任务模型测试"""

    def test_mark_running(self, temp_job: RenderJob):
        """测试标记运行中"""
        temp_job.mark_running("TEST_STAGE")
        assert temp_job.status == JobStatus.RUNNING
        assert temp_job.progress.stage == "TEST_STAGE"
        assert temp_job.started_at is not None

    def test_mark_succeeded(self, temp_job: RenderJob):
        """测试标记成功"""
        temp_job.mark_running()
        temp_job.mark_succeeded()
        assert temp_job.status == JobStatus.SUCCEEDED
        assert temp_job.finished_at is not None

    def test_mark_failed(self, temp_job: RenderJob):
        """测试标记失败"""
        temp_job.mark_running()
        temp_job.mark_failed("Test error")
        assert temp_job.status == JobStatus.FAILED
        assert "Test error" in temp_job.errors

    def test_add_flag(self, temp_job: RenderJob):
        """测试添加告警标记"""
        temp_job.add_flag("测试警告")
        temp_job.add_flag("测试警告")  # 重复添加
        assert temp_job.flags == ["测试警告"]

    def test_display_title(self, temp_job: RenderJob):
        """测试标题：显式标题 > 文件名 > stdin"""
        assert temp_job.display_title == str(temp_job.input_path)

        temp_job.title = "Report"
        assert temp_job.display_title == "Report"

        assert RenderJob(job_id="x").display_title == "stdin"
