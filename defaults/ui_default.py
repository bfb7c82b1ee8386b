
# 主窗口尺寸
MAIN_WINDOW_SIZE = 900, 640

# 解析器列表最小宽度
RESOLVER_LIST_MIN_WIDTH = 220

# 按需规则对话框尺寸
RULE_DIALOG_SIZE = 460, 560

# 启动错误对话框尺寸
ERROR_DIALOG_SIZE = 800, 600

# 服务器/规则列表最大高度
LIST_MAX_HEIGHT = 150

# 分组框样式
GROUP_BOX_STYLE = """
    QGroupBox {
        font-weight: bold;
        font-size: 12px;
        border: 1px solid #ccc;
        border-radius: 5px;
        margin-top: 10px;
        padding-top: 10px;
    }
    QGroupBox::title {
        subcontrol-origin: margin;
        left: 10px;
        padding: 0 5px 0 5px;
    }
"""

# 说明文字样式
HINT_LABEL_STYLE = "color: #666; font-size: 11px;"
