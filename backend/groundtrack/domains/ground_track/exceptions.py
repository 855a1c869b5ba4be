class PostNotFound(LookupError):
    code = "PostNotFound"

    def __init__(self, post_id):
        super().__init__(f"post {post_id} not found")
        self.post_id = post_id
