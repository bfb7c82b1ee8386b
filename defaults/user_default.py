
# 用户配置文件地址
USER_CONFIG_FILE: str = 'data/user_config.json'

# 配置修改后是否立即保存
AUTOSAVE_ENABLED = True

# 解析器内容修改（如名称输入）后延迟保存的时间（毫秒）
AUTOSAVE_DELAY_MS = 800
