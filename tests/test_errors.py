from asciimotion.errors import (
    ERROR_DATA,
    ERROR_RESIZE,
    ApplicationError,
    AsciiMotionError,
    PipelineError,
)


def test_application_error_message():
    err = ApplicationError("boom")
    assert str(err) == "Application error: boom"
    assert err.message == "boom"


def test_pipeline_error_message():
    err = PipelineError(ERROR_RESIZE)
    assert str(err) == f"Image pipeline error: {ERROR_RESIZE}"
    assert err.message == ERROR_RESIZE


def test_errors_share_base_class():
    err = PipelineError(ERROR_DATA)
    assert str(err) == f"Image pipeline error: {ERROR_DATA}"
    assert err.message == ERROR_DATA
    assert isinstance(err, AsciiMotionError)
    assert isinstance(err, PipelineError)
    assert not isinstance(err, ApplicationError)


def test_base_error_has_no_prefix():
    err = AsciiMotionError("plain")
    assert str(err) == "plain"


def test_application_error_is_catchable_as_exception():
    err = ApplicationError("missing")
    assert str(err) == "Application error: missing"
    assert err.message == "missing"
    assert isinstance(err, AsciiMotionError)
    assert isinstance(err, Exception)
    assert not isinstance(err, PipelineError)